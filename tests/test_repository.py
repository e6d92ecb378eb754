import orjson
import pytest

from feed.document_models import Resource
from feed.errors import ResourceNotFoundError
from feed.repository import InMemoryRepository


def test_find_by_id_returns_stored_resource():
    repo = InMemoryRepository([Resource(id=1), Resource(id="b", attributes={"x": 1})])

    assert len(repo) == 2
    assert 1 in repo
    assert repo.find_by_id("b") == Resource(id="b", attributes={"x": 1})


def test_find_by_id_miss_raises():
    repo = InMemoryRepository()
    with pytest.raises(ResourceNotFoundError) as exc:
        repo.find_by_id(99)
    assert exc.value.api_id == 99
    assert isinstance(exc.value, LookupError)


def test_add_rejects_resource_without_id():
    with pytest.raises(ValueError):
        InMemoryRepository().add(Resource())


def test_from_json(tmp_path):
    seed = tmp_path / "seed.json"
    seed.write_bytes(
        orjson.dumps([{"id": 2, "attributes": {"title": "two"}}, {"id": "x"}])
    )

    repo = InMemoryRepository.from_json(seed)

    assert len(repo) == 2
    assert repo.find_by_id(2).attributes == {"title": "two"}
    assert repo.find_by_id("x") == Resource(id="x")


def test_from_json_rejects_non_list(tmp_path):
    seed = tmp_path / "seed.json"
    seed.write_bytes(orjson.dumps({"id": 1}))
    with pytest.raises(ValueError):
        InMemoryRepository.from_json(seed)

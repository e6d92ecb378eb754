from __future__ import annotations

from typing import Callable, Hashable, Iterable

from feed.document_models import Doc, Resource
from feed.errors import DuplicateResourceException, SpecialConditionException
from feed.repository import InMemoryRepository
from feed.result import Result, attempt

Creator = Callable[[Doc], Result[Resource]]


def safe_creator(fn: Callable[[Doc], Resource]) -> Creator:
    """
    Wrap a Doc -> Resource callable that signals failure by raising into a
    creator that always returns a Result.
    """

    def _create(doc: Doc) -> Result[Resource]:
        return attempt(fn, doc)

    _create.__name__ = getattr(fn, "__name__", "creator")
    return _create


class InMemoryCreator:
    def __init__(
        self,
        repository: InMemoryRepository,
        special_ids: Iterable[Hashable] = (),
    ):
        """
        Creation backend storing new resources in `repository`.
        Ids already present raise DuplicateResourceException; ids listed in
        special_ids (compared as strings) raise SpecialConditionException.
        """
        self.repository = repository
        self.special_ids = {str(i) for i in special_ids}

    def create(self, doc: Doc) -> Resource:
        if doc.api_id is None:
            raise ValueError("Document has no api_id")
        if doc.api_id in self.repository:
            raise DuplicateResourceException(doc.api_id)
        if str(doc.api_id) in self.special_ids:
            raise SpecialConditionException(doc.api_id)
        resource = Resource(id=doc.api_id, attributes=dict(doc.metadata))
        self.repository.add(resource)
        return resource

    def __call__(self, doc: Doc) -> Result[Resource]:
        return attempt(self.create, doc)

from __future__ import annotations

from pathlib import Path
from typing import Dict, Hashable, Iterable, Protocol

import orjson

from common.logger import get_logger
from feed.document_models import Resource
from feed.errors import ResourceNotFoundError

log = get_logger(__name__)


class Repository(Protocol):
    def find_by_id(self, api_id: Hashable) -> Resource:
        """Return the stored resource for api_id or raise ResourceNotFoundError."""
        ...


class InMemoryRepository:
    def __init__(self, resources: Iterable[Resource] = ()):
        """
        Dict-backed repository keyed by Resource.id.
        Read-only as far as FeedHandler is concerned; creators may add().
        """
        self._store: Dict[Hashable, Resource] = {}
        for r in resources:
            self.add(r)

    def add(self, resource: Resource) -> None:
        if resource.id is None:
            raise ValueError("Cannot store a resource without an id")
        self._store[resource.id] = resource

    def find_by_id(self, api_id: Hashable) -> Resource:
        try:
            return self._store[api_id]
        except KeyError:
            raise ResourceNotFoundError(api_id) from None

    def __contains__(self, api_id: object) -> bool:
        return api_id in self._store

    def __len__(self) -> int:
        return len(self._store)

    @classmethod
    def from_json(cls, path: Path) -> "InMemoryRepository":
        """
        Seed from a JSON list of {"id": ..., "attributes": {...}} objects.
        """
        raw = orjson.loads(Path(path).read_bytes())
        if not isinstance(raw, list):
            raise ValueError(f"Expected a JSON list of resources in {path}")
        repo = cls(
            Resource(id=r["id"], attributes=dict(r.get("attributes") or {}))
            for r in raw
            if isinstance(r, dict)
        )
        log.info("Seeded repository with %d resources from %s", len(repo), path)
        return repo

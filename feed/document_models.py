from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Hashable, Optional, Union

from feed.errors import CreationError


class DocStatus(str, Enum):
    """Terminal status of a handled document."""

    PROCESSED = "processed"
    FAILED = "failed"


@dataclass(frozen=True)
class Resource:
    id: Optional[Hashable] = None  # None = default/placeholder resource
    attributes: Dict[str, Any] = field(default_factory=dict, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "attributes": dict(self.attributes)}


@dataclass(frozen=True)
class Doc:
    type: str  # classifier used for filtering
    api_id: Optional[Hashable] = None  # external id used for duplicate lookups
    status: Optional[DocStatus] = None
    payload: Union[Resource, CreationError, None] = None
    metadata: Dict[str, Any] = field(default_factory=dict, hash=False)

    def copy_with(
        self,
        status: DocStatus,
        payload: Union[Resource, CreationError],
    ) -> "Doc":
        """Return a new Doc with the outcome fields set; self is untouched."""
        return replace(self, status=DocStatus(status), payload=payload)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Doc":
        return cls(
            type=str(raw.get("type", "")),
            api_id=raw.get("api_id"),
            metadata=dict(raw.get("metadata") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Optional[Dict[str, Any]] = None
        if self.payload is not None:
            payload = self.payload.to_dict()
        return {
            "type": self.type,
            "api_id": self.api_id,
            "status": self.status.value if self.status else None,
            "payload": payload,
            "metadata": dict(self.metadata),
        }

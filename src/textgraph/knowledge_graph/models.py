from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal

EntityType = Literal["person", "organization", "location", "concept", "event", "other"]


@dataclass(frozen=True, slots=True)
class Entity:
    """A typed, named thing recognized in text.

    `id` is derived from `label` (see `extractors.entity_id`), so the same
    normalized label always maps to the same node.
    """

    id: str
    label: str
    type: EntityType
    description: str | None = None
    source: str | None = None
    confidence: float | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "label": self.label, "type": self.type}
        for key in ("description", "source", "confidence"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out


@dataclass(frozen=True, slots=True)
class Relationship:
    """A directed, typed edge between two entities of the same document."""

    id: str
    from_id: str
    to_id: str
    type: str
    label: str
    confidence: float | None = None
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "from": self.from_id,
            "to": self.to_id,
            "type": self.type,
            "label": self.label,
        }
        if self.confidence is not None:
            out["confidence"] = self.confidence
        if self.source is not None:
            out["source"] = self.source
        return out


@dataclass(frozen=True, slots=True)
class GraphMetadata:
    sources: tuple[str, ...] = ()
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True, slots=True)
class Graph:
    """Deduplicated union of entities and relationships of a document set.

    Always derived; never patched in place.
    """

    entities: tuple[Entity, ...] = ()
    relationships: tuple[Relationship, ...] = ()
    metadata: GraphMetadata = field(default_factory=GraphMetadata)

    def entity_ids(self) -> set[str]:
        return {e.id for e in self.entities}

    def relationship_ids(self) -> set[str]:
        return {r.id for r in self.relationships}

    def to_dict(self) -> dict[str, Any]:
        """Render the JSON shape consumed by graph renderers."""
        return {
            "entities": [e.to_dict() for e in self.entities],
            "relationships": [r.to_dict() for r in self.relationships],
            "metadata": {
                "sources": list(self.metadata.sources),
                "createdAt": self.metadata.created_at.isoformat(),
            },
        }

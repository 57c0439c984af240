from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any

from .models import Entity, Graph, Relationship


@dataclass(slots=True)
class GraphQueryEngine:
    """Read-only lookups over one computed graph.

    Renderers call back with a selected entity or relationship id; this layer
    answers those lookups and holds no selection state of its own.
    """

    graph: Graph
    _entities: dict[str, Entity] = field(init=False, repr=False)
    _relationships: dict[str, Relationship] = field(init=False, repr=False)
    _adjacency: dict[str, list[Relationship]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._entities = {e.id: e for e in self.graph.entities}
        self._relationships = {r.id: r for r in self.graph.relationships}
        self._adjacency = {}
        for r in self.graph.relationships:
            self._adjacency.setdefault(r.from_id, []).append(r)
            self._adjacency.setdefault(r.to_id, []).append(r)

    def get_entity(self, entity_id: str) -> Entity | None:
        return self._entities.get(entity_id)

    def get_relationship(self, relationship_id: str) -> Relationship | None:
        return self._relationships.get(relationship_id)

    def relationships_of(self, entity_id: str) -> list[Relationship]:
        return list(self._adjacency.get(entity_id, ()))

    def neighbors(self, entity_id: str, *, depth: int = 1, limit: int = 200) -> dict[str, Any]:
        """Entities within `depth` hops (either direction) plus the edges walked."""
        if entity_id not in self._entities:
            return {"nodes": [], "edges": []}

        seen: dict[str, int] = {entity_id: 0}
        edges: dict[str, Relationship] = {}
        queue = deque([entity_id])
        while queue and len(seen) < limit:
            current = queue.popleft()
            if seen[current] >= depth:
                continue
            for r in self._adjacency.get(current, ()):
                edges.setdefault(r.id, r)
                other = r.to_id if r.from_id == current else r.from_id
                if other not in seen and len(seen) < limit:
                    seen[other] = seen[current] + 1
                    queue.append(other)

        nodes = [self._entities[i] for i in seen]
        kept = [r for r in edges.values() if r.from_id in seen and r.to_id in seen]
        return {
            "nodes": [n.to_dict() for n in nodes],
            "edges": [r.to_dict() for r in kept],
        }

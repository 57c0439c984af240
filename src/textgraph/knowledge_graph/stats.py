from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from .models import Graph


@dataclass(frozen=True, slots=True)
class GraphStats:
    entity_count: int = 0
    relationship_count: int = 0
    entity_types: dict[str, int] = field(default_factory=dict)
    relationship_types: dict[str, int] = field(default_factory=dict)
    sources: tuple[str, ...] = ()
    average_connectivity: float = 0.0

    def to_dict(self) -> dict:
        return {
            "entityCount": self.entity_count,
            "relationshipCount": self.relationship_count,
            "entityTypes": dict(self.entity_types),
            "relationshipTypes": dict(self.relationship_types),
            "sources": list(self.sources),
            "averageConnectivity": self.average_connectivity,
        }


def calculate_graph_stats(graph: Graph) -> GraphStats:
    n_entities = len(graph.entities)
    n_rels = len(graph.relationships)
    return GraphStats(
        entity_count=n_entities,
        relationship_count=n_rels,
        entity_types=dict(Counter(e.type for e in graph.entities)),
        relationship_types=dict(Counter(r.type for r in graph.relationships)),
        sources=graph.metadata.sources,
        average_connectivity=(n_rels / n_entities) if n_entities else 0.0,
    )

"""Knowledge graph subsystem.

This module provides:
- Pluggable entity and relationship matcher rules
- Per-document extraction and cross-document aggregation
- Read-only queries and statistics over the derived graph

Extraction is pattern based and has no NLP dependencies.
"""

from .extractors import EntityExtractor, RelationshipExtractor, entity_id, relationship_id
from .models import Entity, Graph, GraphMetadata, Relationship
from .pipeline import DocumentProcessor, ExtractionResult, GraphAggregator, build_graph
from .query_engine import GraphQueryEngine
from .scoring import FixedScorer, RandomScorer
from .stats import GraphStats, calculate_graph_stats
from .workspace import DocumentSet, GraphWorkspace

__all__ = [
    "Entity",
    "Relationship",
    "Graph",
    "GraphMetadata",
    "EntityExtractor",
    "RelationshipExtractor",
    "entity_id",
    "relationship_id",
    "DocumentProcessor",
    "ExtractionResult",
    "GraphAggregator",
    "build_graph",
    "GraphQueryEngine",
    "FixedScorer",
    "RandomScorer",
    "GraphStats",
    "calculate_graph_stats",
    "DocumentSet",
    "GraphWorkspace",
]

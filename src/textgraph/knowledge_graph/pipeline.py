from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Protocol

from .extractors import EntityExtractor, RelationshipExtractor
from .models import Entity, Graph, GraphMetadata, Relationship
from .scoring import ConfidenceScorer

logger = logging.getLogger(__name__)


class DocumentLike(Protocol):
    """What the pipeline reads from a document: its id, title and text."""

    id: str
    title: str
    content: str


@dataclass(slots=True)
class ExtractionStats:
    entities: int
    relationships: int
    extract_ms: float


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    entities: tuple[Entity, ...]
    relationships: tuple[Relationship, ...]
    stats: ExtractionStats


class DocumentProcessor:
    """Per-document extraction: entities first, then relationships between them."""

    def __init__(
        self,
        entity_extractor: EntityExtractor | None = None,
        relationship_extractor: RelationshipExtractor | None = None,
    ):
        self.entity_extractor = entity_extractor or EntityExtractor()
        self.relationship_extractor = relationship_extractor or RelationshipExtractor()

    @classmethod
    def with_scorer(cls, scorer: ConfidenceScorer) -> "DocumentProcessor":
        return cls(EntityExtractor(scorer=scorer), RelationshipExtractor(scorer=scorer))

    def process_text(self, content: str, title: str) -> ExtractionResult:
        t0 = time.perf_counter()
        entities = self.entity_extractor.extract(content, title)
        relationships = self.relationship_extractor.extract(content, entities, title)
        t1 = time.perf_counter()
        return ExtractionResult(
            entities=tuple(entities),
            relationships=tuple(relationships),
            stats=ExtractionStats(
                entities=len(entities),
                relationships=len(relationships),
                extract_ms=(t1 - t0) * 1000.0,
            ),
        )

    def process(self, document: DocumentLike) -> ExtractionResult:
        return self.process_text(document.content, document.title)


@dataclass(slots=True)
class GraphAggregator:
    """Merges per-document extraction results into one graph.

    Entities and relationships are deduplicated by id; the first document that
    produced an id wins and later attributes for it are discarded. The result
    depends only on the documents passed in.

    With `memoize=True` per-document results are reused while a document's id,
    title and content are unchanged; entries for documents no longer passed in
    are dropped on the next call.
    """

    processor: DocumentProcessor = field(default_factory=DocumentProcessor)
    memoize: bool = False
    _cache: dict[tuple[str, str, str], ExtractionResult] = field(default_factory=dict, repr=False)

    def _extract(self, document: DocumentLike) -> ExtractionResult:
        if not self.memoize:
            return self.processor.process(document)
        key = (document.id, document.title, document.content)
        result = self._cache.get(key)
        if result is None:
            result = self._cache[key] = self.processor.process(document)
        return result

    def aggregate(self, documents: Iterable[DocumentLike]) -> Graph:
        docs = list(documents)
        results = [self._extract(doc) for doc in docs]
        if self.memoize:
            live = {(d.id, d.title, d.content) for d in docs}
            for key in [k for k in self._cache if k not in live]:
                del self._cache[key]

        entities: dict[str, Entity] = {}
        relationships: dict[str, Relationship] = {}
        for result in results:
            for e in result.entities:
                entities.setdefault(e.id, e)
        for result in results:
            for r in result.relationships:
                relationships.setdefault(r.id, r)

        logger.info(
            "aggregated %d documents into %d entities, %d relationships",
            len(docs),
            len(entities),
            len(relationships),
        )
        return Graph(
            entities=tuple(entities.values()),
            relationships=tuple(relationships.values()),
            metadata=GraphMetadata(
                sources=tuple(d.title for d in docs),
                created_at=datetime.now(timezone.utc),
            ),
        )


def build_graph(documents: Iterable[DocumentLike], *, scorer: ConfidenceScorer | None = None) -> Graph:
    """One-shot `(documents) -> graph`."""
    processor = DocumentProcessor.with_scorer(scorer) if scorer is not None else DocumentProcessor()
    return GraphAggregator(processor).aggregate(documents)

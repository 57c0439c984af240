from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Generic, Iterator, TypeVar

from textgraph.errors import DuplicateDocumentError, UnknownDocumentError

from .models import Graph
from .pipeline import DocumentLike, GraphAggregator
from .query_engine import GraphQueryEngine
from .stats import GraphStats, calculate_graph_stats

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=DocumentLike)


@dataclass(frozen=True, slots=True)
class DocumentSet(Generic[D]):
    """Immutable, ordered snapshot of the loaded documents."""

    documents: tuple[D, ...] = ()

    def __iter__(self) -> Iterator[D]:
        return iter(self.documents)

    def __len__(self) -> int:
        return len(self.documents)

    def __contains__(self, doc_id: object) -> bool:
        return any(d.id == doc_id for d in self.documents)

    def get(self, doc_id: str) -> D | None:
        for d in self.documents:
            if d.id == doc_id:
                return d
        return None

    def add(self, document: D) -> "DocumentSet[D]":
        if document.id in self:
            raise DuplicateDocumentError(f"document already loaded: {document.id}")
        return DocumentSet(self.documents + (document,))

    def remove(self, doc_id: str) -> "DocumentSet[D]":
        if doc_id not in self:
            raise UnknownDocumentError(doc_id)
        return DocumentSet(tuple(d for d in self.documents if d.id != doc_id))


class GraphWorkspace(Generic[D]):
    """Owns the current document snapshot and the graph derived from it.

    Every mutation swaps in a new snapshot and recomputes the graph from
    scratch, so the graph never carries entries of removed documents.
    """

    def __init__(self, aggregator: GraphAggregator | None = None, documents: DocumentSet[D] | None = None):
        self.aggregator = aggregator or GraphAggregator()
        self._documents: DocumentSet[D] = documents or DocumentSet()
        self._graph = self.aggregator.aggregate(self._documents)

    @property
    def documents(self) -> DocumentSet[D]:
        return self._documents

    @property
    def graph(self) -> Graph:
        return self._graph

    def _swap(self, documents: DocumentSet[D]) -> Graph:
        graph = self.aggregator.aggregate(documents)
        self._documents = documents
        self._graph = graph
        return graph

    def add(self, document: D) -> Graph:
        logger.info("adding document %s (%r)", document.id, document.title)
        return self._swap(self._documents.add(document))

    def remove(self, doc_id: str) -> Graph:
        logger.info("removing document %s", doc_id)
        return self._swap(self._documents.remove(doc_id))

    def clear(self) -> Graph:
        return self._swap(DocumentSet())

    async def acquire(self, pending: Awaitable[D]) -> D:
        """Await a document acquisition and add its result.

        If the acquisition raises, the document set and graph are unchanged
        and the error propagates.
        """
        document = await pending
        self.add(document)
        return document

    def query(self) -> GraphQueryEngine:
        return GraphQueryEngine(self._graph)

    def stats(self) -> GraphStats:
        return calculate_graph_stats(self._graph)

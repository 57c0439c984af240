from __future__ import annotations

import itertools

import pytest

from textgraph.knowledge_graph import DocumentProcessor, FixedScorer, GraphAggregator
from textgraph.sources import Document

_ids = itertools.count()


def make_doc(title: str, content: str, doc_id: str | None = None) -> Document:
    return Document(id=doc_id or f"doc-{next(_ids)}", title=title, content=content)


@pytest.fixture
def scorer():
    return FixedScorer(0.8)


@pytest.fixture
def processor(scorer):
    return DocumentProcessor.with_scorer(scorer)


@pytest.fixture
def aggregator(processor):
    return GraphAggregator(processor)

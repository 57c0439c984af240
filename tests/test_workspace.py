from __future__ import annotations

import asyncio

import pytest

from textgraph.errors import AcquisitionError, DuplicateDocumentError, UnknownDocumentError
from textgraph.knowledge_graph import DocumentSet, GraphQueryEngine, GraphWorkspace, calculate_graph_stats

from .conftest import make_doc

SCENARIO = "Dr. Sarah Johnson works at Stanford University."


@pytest.fixture
def workspace(aggregator):
    return GraphWorkspace(aggregator)


def test_document_set_is_immutable():
    empty = DocumentSet()
    doc = make_doc("A", SCENARIO, doc_id="a")
    one = empty.add(doc)
    assert len(empty) == 0
    assert len(one) == 1
    assert "a" in one
    assert one.get("a") is doc
    assert len(one.remove("a")) == 0
    assert len(one) == 1


def test_duplicate_document_is_rejected(workspace):
    doc = make_doc("A", SCENARIO, doc_id="a")
    workspace.add(doc)
    before = workspace.graph
    with pytest.raises(DuplicateDocumentError):
        workspace.add(doc)
    assert workspace.graph is before


def test_unknown_document_removal(workspace):
    with pytest.raises(UnknownDocumentError):
        workspace.remove("missing")
    with pytest.raises(KeyError):
        workspace.remove("missing")


def test_failed_acquisition_leaves_graph_unchanged(workspace):
    workspace.add(make_doc("A", SCENARIO, doc_id="a"))
    before_docs = workspace.documents
    before_graph = workspace.graph

    async def failing():
        raise AcquisitionError("remote source unavailable")

    with pytest.raises(AcquisitionError):
        asyncio.run(workspace.acquire(failing()))
    assert workspace.documents is before_docs
    assert workspace.graph is before_graph


def test_successful_acquisition_adds_document(workspace):
    async def fetch():
        return make_doc("Fetched", SCENARIO, doc_id="fetched")

    doc = asyncio.run(workspace.acquire(fetch()))
    assert doc.id == "fetched"
    assert workspace.graph.metadata.sources == ("Fetched",)
    assert "stanford-university" in workspace.graph.entity_ids()


def test_graph_recomputed_on_every_mutation(workspace):
    g0 = workspace.graph
    workspace.add(make_doc("A", SCENARIO, doc_id="a"))
    g1 = workspace.graph
    workspace.clear()
    assert g0 is not g1
    assert workspace.graph.entities == ()


def test_stats(workspace):
    workspace.add(make_doc("A", SCENARIO, doc_id="a"))
    stats = workspace.stats()
    assert stats.entity_count == 2
    assert stats.relationship_count == 1
    assert stats.entity_types == {"person": 1, "organization": 1}
    assert stats.relationship_types == {"works-at": 1}
    assert stats.average_connectivity == pytest.approx(0.5)
    assert stats.to_dict()["entityCount"] == 2


def test_stats_of_empty_graph(workspace):
    stats = calculate_graph_stats(workspace.graph)
    assert stats.entity_count == 0
    assert stats.average_connectivity == 0.0


def test_query_engine_lookups(workspace):
    workspace.add(make_doc("A", SCENARIO, doc_id="a"))
    engine = workspace.query()
    assert isinstance(engine, GraphQueryEngine)
    assert engine.get_entity("sarah-johnson").type == "person"
    assert engine.get_entity("nobody") is None
    rel_id = "sarah-johnson--stanford-university--works-at"
    assert engine.get_relationship(rel_id).to_id == "stanford-university"
    assert [r.id for r in engine.relationships_of("stanford-university")] == [rel_id]

    around = engine.neighbors("stanford-university")
    assert {n["id"] for n in around["nodes"]} == {"sarah-johnson", "stanford-university"}
    assert [e["id"] for e in around["edges"]] == [rel_id]
    assert engine.neighbors("nobody") == {"nodes": [], "edges": []}

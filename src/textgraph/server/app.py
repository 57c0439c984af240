from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from textgraph import __version__
from textgraph.errors import AcquisitionError, DuplicateDocumentError, UnknownDocumentError
from textgraph.knowledge_graph import GraphAggregator, GraphWorkspace
from textgraph.sources import Document, WikipediaClient, sample_document, text_document

WikipediaFetch = Callable[[str], Awaitable[Document]]


class TextDocumentIn(BaseModel):
    title: str
    content: str
    author: str | None = None


class WikipediaIn(BaseModel):
    title: str


def _document_out(doc: Document) -> dict[str, Any]:
    return doc.model_dump(mode="json")


def create_app(
    workspace: GraphWorkspace[Document] | None = None,
    *,
    fetch_wikipedia: WikipediaFetch | None = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # one shared client per process unless a fetcher was injected
        client = None
        if app.state.fetch_wikipedia is None:
            client = WikipediaClient()
            app.state.wikipedia = client
            app.state.fetch_wikipedia = client.summary
        try:
            yield
        finally:
            if client is not None:
                app.state.fetch_wikipedia = None
                await client.aclose()

    app = FastAPI(title="textgraph - document knowledge graph", version=__version__, lifespan=lifespan)
    app.state.fetch_wikipedia = fetch_wikipedia
    ws: GraphWorkspace[Document] = workspace or GraphWorkspace(GraphAggregator(memoize=True))
    app.state.workspace = ws

    def _add(doc: Document) -> dict[str, Any]:
        try:
            ws.add(doc)
        except DuplicateDocumentError as e:
            raise HTTPException(status_code=409, detail=str(e))
        return {"document": _document_out(doc), "graph": ws.graph.to_dict()}

    @app.get("/health")
    async def health():
        return {"ok": True, "documents": len(ws.documents)}

    @app.get("/graph")
    async def graph():
        return ws.graph.to_dict()

    @app.get("/graph/stats")
    async def graph_stats():
        return ws.stats().to_dict()

    @app.get("/documents")
    async def list_documents():
        return {"count": len(ws.documents), "documents": [_document_out(d) for d in ws.documents]}

    @app.post("/documents", status_code=201)
    async def add_text(payload: TextDocumentIn):
        try:
            doc = text_document(payload.title, payload.content, author=payload.author)
        except AcquisitionError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return _add(doc)

    @app.post("/documents/wikipedia", status_code=201)
    async def add_wikipedia(payload: WikipediaIn):
        title = payload.title.strip()
        if not title:
            raise HTTPException(status_code=422, detail="title must not be empty")
        fetch = app.state.fetch_wikipedia
        if fetch is None:
            raise HTTPException(status_code=503, detail="Wikipedia source is not running")
        try:
            doc = await fetch(title)
        except AcquisitionError as e:
            raise HTTPException(status_code=502, detail=str(e))
        return _add(doc)

    @app.post("/documents/samples/{name}", status_code=201)
    async def add_sample(name: str):
        try:
            doc = sample_document(name)
        except AcquisitionError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return _add(doc)

    @app.delete("/documents/{doc_id}")
    async def remove_document(doc_id: str):
        try:
            ws.remove(doc_id)
        except UnknownDocumentError:
            raise HTTPException(status_code=404, detail=f"unknown document: {doc_id}")
        return ws.graph.to_dict()

    @app.get("/entities/{entity_id}")
    async def get_entity(entity_id: str):
        engine = ws.query()
        entity = engine.get_entity(entity_id)
        if entity is None:
            raise HTTPException(status_code=404, detail=f"unknown entity: {entity_id}")
        return {
            "entity": entity.to_dict(),
            "relationships": [r.to_dict() for r in engine.relationships_of(entity_id)],
        }

    @app.get("/entities/{entity_id}/neighbors")
    async def get_neighbors(
        entity_id: str,
        depth: int = Query(default=1, ge=1, le=6),
        limit: int = Query(default=200, ge=1, le=1000),
    ):
        engine = ws.query()
        if engine.get_entity(entity_id) is None:
            raise HTTPException(status_code=404, detail=f"unknown entity: {entity_id}")
        return engine.neighbors(entity_id, depth=depth, limit=limit)

    @app.get("/relationships/{relationship_id}")
    async def get_relationship(relationship_id: str):
        rel = ws.query().get_relationship(relationship_id)
        if rel is None:
            raise HTTPException(status_code=404, detail=f"unknown relationship: {relationship_id}")
        return rel.to_dict()

    return app

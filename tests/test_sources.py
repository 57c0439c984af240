from __future__ import annotations

import asyncio

import httpx
import pytest

from textgraph.errors import AcquisitionError
from textgraph.sources import SAMPLES, WikipediaClient, sample_document, sample_documents, text_document
from textgraph.sources.wikipedia import NO_CONTENT

TURING = {
    "title": "Alan Turing",
    "extract": "Alan Turing worked at Bletchley Park.",
    "content_urls": {"desktop": {"page": "https://en.wikipedia.org/wiki/Alan_Turing"}},
}


def _summary(handler, title: str):
    async def run():
        async with WikipediaClient(transport=httpx.MockTransport(handler)) as client:
            return await client.summary(title)

    return asyncio.run(run())


def test_text_document():
    doc = text_document("Notes", "Grace Hopper met Alan Turing.")
    assert doc.id.startswith("custom-")
    assert doc.type == "text"
    assert doc.date is not None
    assert text_document("Notes", "x").id != doc.id


@pytest.mark.parametrize("title,content", [("", "text"), ("  ", "text"), ("Title", ""), ("Title", "  ")])
def test_text_document_rejects_blank_input(title, content):
    with pytest.raises(AcquisitionError):
        text_document(title, content)


def test_samples():
    docs = sample_documents()
    assert [d.id for d in docs] == [SAMPLES[name].id for name in SAMPLES]
    academic = sample_document("academic")
    assert academic.title == "Attention Mechanisms in Deep Learning"
    assert academic is not SAMPLES["academic"]


def test_unknown_sample():
    with pytest.raises(AcquisitionError):
        sample_document("poetry")


def test_wikipedia_summary():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=TURING)

    doc = _summary(handler, "Alan Turing")
    assert doc.id == "wikipedia-Alan Turing"
    assert doc.title == "Alan Turing"
    assert doc.content == TURING["extract"]
    assert doc.type == "wikipedia"
    assert doc.url == "https://en.wikipedia.org/wiki/Alan_Turing"
    assert len(seen) == 1
    assert "/page/summary/" in seen[0]


def test_wikipedia_summary_without_extract():
    doc = _summary(lambda request: httpx.Response(200, json={"title": "Stub"}), "Stub")
    assert doc.content == NO_CONTENT
    assert doc.url is None


def test_wikipedia_http_error_is_acquisition_error():
    with pytest.raises(AcquisitionError):
        _summary(lambda request: httpx.Response(404, json={"type": "not_found"}), "Nope")


def test_wikipedia_bad_payload_is_acquisition_error():
    with pytest.raises(AcquisitionError):
        _summary(lambda request: httpx.Response(200, content=b"<html>"), "Broken")


def test_wikipedia_blank_title():
    with pytest.raises(AcquisitionError):
        _summary(lambda request: httpx.Response(200, json=TURING), "   ")

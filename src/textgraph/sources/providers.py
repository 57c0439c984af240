from __future__ import annotations

import uuid
from datetime import datetime, timezone

from textgraph.errors import AcquisitionError

from .models import Document

_ACADEMIC_SAMPLE = """
Recent advances in machine learning have revolutionized natural language processing.
Dr. Sarah Johnson from Stanford University published groundbreaking research on transformer architectures.
The study, conducted in collaboration with Google Research, demonstrates significant improvements in language understanding.
The paper, titled "Attention Mechanisms in Deep Learning", was presented at the International Conference on Machine Learning.
Meta AI and OpenAI have also contributed to this field with their respective foundation models.
These models are trained on massive datasets and located in data centers across California and Washington.
The research team collaborated with researchers from MIT and Carnegie Mellon University.
"""

_NEWS_SAMPLE = """
Tech Giant Corp announced a major partnership with Innovation Labs to develop next-generation AI systems.
The collaboration, led by CEO Mike Chen, will focus on sustainable technology solutions.
The partnership was established during the Global Tech Summit in San Francisco.
Amazon Web Services and Microsoft Azure are providing cloud infrastructure support.
The initiative is located in Silicon Valley and aims to revolutionize the technology industry.
Several universities including UC Berkeley and Stanford University are participating as research partners.
"""

SAMPLES: dict[str, Document] = {
    "academic": Document(
        id="academic-sample",
        title="Attention Mechanisms in Deep Learning",
        content=_ACADEMIC_SAMPLE,
        type="academic",
        author="Dr. Sarah Johnson",
        date=datetime(2024, 1, 15, tzinfo=timezone.utc),
    ),
    "news": Document(
        id="news-sample",
        title="Major Tech Partnership Announced",
        content=_NEWS_SAMPLE,
        type="news",
        date=datetime(2024, 12, 15, tzinfo=timezone.utc),
    ),
}


def text_document(title: str, content: str, *, author: str | None = None) -> Document:
    """Wrap caller-supplied text as a Document with a fresh id."""
    title = (title or "").strip()
    if not title:
        raise AcquisitionError("title must not be empty")
    if not content or not content.strip():
        raise AcquisitionError("content must not be empty")
    return Document(
        id=f"custom-{uuid.uuid4().hex}",
        title=title,
        content=content,
        type="text",
        author=author,
        date=datetime.now(timezone.utc),
    )


def sample_document(name: str) -> Document:
    try:
        return SAMPLES[name].model_copy(deep=True)
    except KeyError:
        raise AcquisitionError(f"unknown sample {name!r}; choose from {sorted(SAMPLES)}") from None


def sample_documents() -> list[Document]:
    return [sample_document(name) for name in SAMPLES]

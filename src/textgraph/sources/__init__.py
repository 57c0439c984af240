"""Document sources: custom text, built-in samples and Wikipedia summaries."""

from .models import Document
from .providers import SAMPLES, sample_document, sample_documents, text_document
from .wikipedia import WikipediaClient

__all__ = [
    "Document",
    "SAMPLES",
    "sample_document",
    "sample_documents",
    "text_document",
    "WikipediaClient",
]

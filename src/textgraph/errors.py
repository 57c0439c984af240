from __future__ import annotations


class TextgraphError(Exception):
    """Base class for textgraph errors."""


class AcquisitionError(TextgraphError):
    """A document could not be acquired from its source."""


class DuplicateDocumentError(TextgraphError):
    """A document with the same id is already loaded."""


class UnknownDocumentError(TextgraphError, KeyError):
    """No loaded document has the requested id."""

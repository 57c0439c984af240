"""textgraph: turn free-text documents into an explorable entity graph."""

__version__ = "0.1.0"

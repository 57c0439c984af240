"""HTTP API serving the derived graph to renderers."""

from .app import create_app

__all__ = ["create_app"]

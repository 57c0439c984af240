from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from textgraph.errors import AcquisitionError
from textgraph.settings import settings

from .http import HttpClientFactory, transient_retry
from .models import Document

logger = logging.getLogger(__name__)

NO_CONTENT = "No content available"


class WikipediaClient:
    """Wikipedia REST API client (page summaries).

    Docs: https://en.wikipedia.org/api/rest_v1/
    """

    def __init__(self, base_url: str | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self._client = HttpClientFactory.client(
            base_url=base_url or settings.wikipedia_base_url,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self) -> "WikipediaClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    @transient_retry()
    async def _page_summary(self, title: str) -> dict:
        r = await self._client.get(f"/page/summary/{quote(title, safe='')}")
        r.raise_for_status()
        return r.json()

    async def summary(self, title: str) -> Document:
        """Fetch the summary of the article `title` as a Document.

        Any failure surfaces as AcquisitionError; nothing partial is returned.
        """
        title = title.strip()
        if not title:
            raise AcquisitionError("Wikipedia title must not be empty")
        try:
            data = await self._page_summary(title)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Wikipedia fetch failed for %r: %s", title, e)
            raise AcquisitionError(f"Failed to fetch Wikipedia article {title!r}: {e}") from e
        if not isinstance(data, dict):
            raise AcquisitionError(f"Unexpected Wikipedia payload for {title!r}")
        return self._to_document(title, data)

    def _to_document(self, requested: str, d: dict) -> Document:
        url = ((d.get("content_urls") or {}).get("desktop") or {}).get("page")
        return Document(
            id=f"wikipedia-{requested}",
            title=d.get("title") or requested,
            content=d.get("extract") or NO_CONTENT,
            type="wikipedia",
            url=url,
        )

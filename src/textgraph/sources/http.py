from __future__ import annotations

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from textgraph.settings import settings


def default_timeout() -> httpx.Timeout:
    return httpx.Timeout(connect=10.0, read=30.0, write=10.0, pool=10.0)


def default_limits() -> httpx.Limits:
    return httpx.Limits(max_connections=20, max_keepalive_connections=5)


class HttpClientFactory:
    """Creates shared httpx clients with sane defaults.

    Keep one client per source; do not create per-request.
    """

    @staticmethod
    def client(
        base_url: str | None = None,
        headers: dict | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> httpx.AsyncClient:
        merged = {"User-Agent": settings.user_agent}
        merged.update(headers or {})
        return httpx.AsyncClient(
            base_url=base_url or "",
            headers=merged,
            timeout=default_timeout(),
            limits=default_limits(),
            follow_redirects=True,
            transport=transport,
        )


TransientHttpError = (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError)


def transient_retry(attempts: int | None = None, initial: float = 0.5):
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts or settings.http_max_attempts),
        wait=wait_exponential_jitter(initial=initial, max=10.0),
        retry=retry_if_exception_type(TransientHttpError),
    )

"""Async HTTP fetcher for article pages."""

from __future__ import annotations

import httpx

from newsdesk.config import settings
from newsdesk.crawler.models import FetchResult

# Several publishers reject non-browser agents or serve a stripped page to
# them, and some only return Korean content when asked for it.
DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "ko-KR,ko;q=0.9,en-US;q=0.8,en;q=0.7",
}


def build_client(timeout: float | None = None) -> httpx.AsyncClient:
    """Return an ``httpx.AsyncClient`` configured for article fetching.

    The caller owns the client and must close it (``async with`` or
    ``await client.aclose()``).
    """
    return httpx.AsyncClient(
        headers=DEFAULT_HEADERS,
        timeout=settings.request_timeout if timeout is None else timeout,
        follow_redirects=True,
    )


async def fetch_raw(client: httpx.AsyncClient, url: str) -> FetchResult:
    """Fetch *url* and return its undecoded body.

    The body is kept as bytes because the declared charset of Korean news
    pages is often wrong; decoding happens later in the pipeline.

    Raises:
        httpx.HTTPStatusError: If the server returns a 4xx/5xx status code.
        httpx.TimeoutException: If the request exceeds the client timeout.
    """
    response = await client.get(url)
    response.raise_for_status()
    return FetchResult(
        url=url,
        raw_bytes=response.content,
        content_type=response.headers.get("content-type", ""),
        status_code=response.status_code,
    )

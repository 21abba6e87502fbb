"""Naver News search API client.

Credentials (``NAVER_CLIENT_ID`` / ``NAVER_CLIENT_SECRET``) are checked once
when the client is built.  A client without them refuses to exist, so a
misconfigured deployment fails at startup rather than on every request.
"""

from __future__ import annotations

import html
import logging
import re
from typing import Any, Optional

import httpx

from newsdesk.config import settings
from newsdesk.errors import ConfigurationError, NewsSearchError
from newsdesk.news.models import NewsItem

logger = logging.getLogger(__name__)

NAVER_NEWS_URL = "https://openapi.naver.com/v1/search/news.json"

ECONOMY_QUERY = "경제"
REAL_ESTATE_QUERY = "부동산"

_TAG = re.compile(r"<[^>]*>?")


def strip_markup(text: str) -> str:
    """Remove the ``<b>`` highlight tags and HTML entities the API returns."""
    return html.unescape(_TAG.sub("", text or "")).strip()


def _to_item(raw: dict[str, Any]) -> NewsItem:
    return NewsItem(
        title=strip_markup(raw.get("title", "")),
        link=raw.get("link", ""),
        original_link=raw.get("originallink", ""),
        description=strip_markup(raw.get("description", "")),
        pub_date=raw.get("pubDate", ""),
    )


class NaverNewsClient:
    """Query the Naver News search API.

    Args:
        client_id: API client id; defaults to ``settings.naver_client_id``.
        client_secret: API secret; defaults to ``settings.naver_client_secret``.
        http: ``httpx.AsyncClient`` to send requests with.  The caller owns
            it.  When omitted, each search opens and closes its own client.

    Raises:
        ConfigurationError: If either credential is missing.
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        http: Optional[httpx.AsyncClient] = None,
        display: Optional[int] = None,
    ) -> None:
        self._client_id = client_id if client_id is not None else settings.naver_client_id
        self._client_secret = (
            client_secret if client_secret is not None else settings.naver_client_secret
        )
        if not self._client_id or not self._client_secret:
            raise ConfigurationError(
                "Naver API credentials are not configured. "
                "Set NAVER_CLIENT_ID and NAVER_CLIENT_SECRET."
            )
        self._http = http
        self._display = display or settings.news_display

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "X-Naver-Client-Id": self._client_id,
            "X-Naver-Client-Secret": self._client_secret,
        }

    async def _get(self, client: httpx.AsyncClient, query: str) -> dict[str, Any]:
        resp = await client.get(
            NAVER_NEWS_URL,
            headers=self._headers,
            params={"query": query, "display": self._display, "sort": "sim"},
        )
        resp.raise_for_status()
        return resp.json()

    async def search(self, query: str) -> list[NewsItem]:
        """Return news items for *query*, most relevant first.

        Raises:
            NewsSearchError: On any HTTP failure or a malformed payload.
        """
        try:
            if self._http is not None:
                data = await self._get(self._http, query)
            else:
                async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
                    data = await self._get(client, query)
            items = [_to_item(raw) for raw in data["items"]]
        except httpx.HTTPError as exc:
            logger.error("[news] search failed for %r: %s", query, exc)
            raise NewsSearchError(f"News search failed: {exc}") from exc
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("[news] unreadable search response for %r: %r", query, exc)
            raise NewsSearchError("News search returned an unexpected payload.") from exc

        logger.info("[news] %r → %d item(s).", query, len(items))
        return items

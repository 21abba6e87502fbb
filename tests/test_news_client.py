"""Tests for the Naver News search client and date formatting.

``respx`` stands in for the search API; no real HTTP connections are made.
pytest-asyncio runs the ``async def`` tests (``asyncio_mode = "auto"``).
"""

from __future__ import annotations

import httpx
import pytest
import respx

from newsdesk.dates import format_korean_date
from newsdesk.errors import ConfigurationError, NewsSearchError
from newsdesk.news.client import NAVER_NEWS_URL, NaverNewsClient, strip_markup
from newsdesk.news.models import NewsItem


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_PAYLOAD = {
    "lastBuildDate": "Mon, 05 Feb 2024 10:00:00 +0900",
    "total": 2,
    "items": [
        {
            "title": "<b>금리</b> 동결 &quot;장기화&quot;",
            "originallink": "https://www.yna.co.kr/view/AKR20240205000100002",
            "link": "https://n.news.naver.com/mnews/article/001/0014480000",
            "description": "한국은행이 <b>금리</b>를 동결했다.",
            "pubDate": "Mon, 05 Feb 2024 09:30:00 +0900",
        },
        {
            "title": "부동산 시장 전망",
            "originallink": "",
            "link": "https://n.news.naver.com/mnews/article/015/0004940000",
            "description": "전망 기사",
            "pubDate": "Mon, 05 Feb 2024 08:00:00 +0900",
        },
    ],
}


def _client(**kwargs) -> NaverNewsClient:
    return NaverNewsClient(client_id="id-123", client_secret="secret-456", **kwargs)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    def test_missing_credentials_refuse_to_build(self) -> None:
        with pytest.raises(ConfigurationError):
            NaverNewsClient(client_id="", client_secret="")

    def test_missing_secret_only(self) -> None:
        with pytest.raises(ConfigurationError):
            NaverNewsClient(client_id="id", client_secret="")

    def test_credentials_from_settings(self, monkeypatch) -> None:
        monkeypatch.setattr("newsdesk.config.settings.naver_client_id", "env-id")
        monkeypatch.setattr("newsdesk.config.settings.naver_client_secret", "env-secret")
        NaverNewsClient()  # does not raise


# ---------------------------------------------------------------------------
# search
# ---------------------------------------------------------------------------

class TestSearch:
    async def test_parses_items(self) -> None:
        with respx.mock:
            respx.get(NAVER_NEWS_URL).mock(return_value=httpx.Response(200, json=_PAYLOAD))
            items = await _client().search("금리")

        assert len(items) == 2
        first = items[0]
        assert isinstance(first, NewsItem)
        assert first.title == '금리 동결 "장기화"'
        assert first.description == "한국은행이 금리를 동결했다."
        assert first.pub_date == "Mon, 05 Feb 2024 09:30:00 +0900"
        assert first.article_url == "https://www.yna.co.kr/view/AKR20240205000100002"
        # No original link → portal link is used.
        assert items[1].article_url == "https://n.news.naver.com/mnews/article/015/0004940000"

    async def test_sends_credentials_and_params(self) -> None:
        with respx.mock:
            route = respx.get(NAVER_NEWS_URL).mock(return_value=httpx.Response(200, json=_PAYLOAD))
            await _client(display=5).search("부동산")

        request = route.calls.last.request
        assert request.headers["X-Naver-Client-Id"] == "id-123"
        assert request.headers["X-Naver-Client-Secret"] == "secret-456"
        assert request.url.params["query"] == "부동산"
        assert request.url.params["display"] == "5"
        assert request.url.params["sort"] == "sim"

    async def test_http_error_raises_search_error(self) -> None:
        with respx.mock:
            respx.get(NAVER_NEWS_URL).mock(return_value=httpx.Response(401, json={"errorCode": "024"}))
            with pytest.raises(NewsSearchError):
                await _client().search("금리")

    async def test_malformed_payload_raises_search_error(self) -> None:
        with respx.mock:
            respx.get(NAVER_NEWS_URL).mock(return_value=httpx.Response(200, json={"unexpected": True}))
            with pytest.raises(NewsSearchError):
                await _client().search("금리")

    async def test_injected_http_client(self) -> None:
        with respx.mock:
            respx.get(NAVER_NEWS_URL).mock(return_value=httpx.Response(200, json=_PAYLOAD))
            async with httpx.AsyncClient() as http:
                items = await _client(http=http).search("금리")

        assert len(items) == 2


class TestStripMarkup:
    def test_tags_and_entities(self) -> None:
        assert strip_markup("<b>코스피</b> &amp; 코스닥") == "코스피 & 코스닥"

    def test_none_safe(self) -> None:
        assert strip_markup(None) == ""  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# format_korean_date
# ---------------------------------------------------------------------------

class TestFormatKoreanDate:
    def test_rfc822(self) -> None:
        assert format_korean_date("Mon, 05 Feb 2024 09:30:00 +0900") == "2024년 2월 5일 (월) 09:30"

    def test_iso(self) -> None:
        assert format_korean_date("2024-03-10T18:05:00") == "2024년 3월 10일 (일) 18:05"

    def test_invalid_returned_unchanged(self) -> None:
        assert format_korean_date("어제 오후") == "어제 오후"
        assert format_korean_date("") == ""

"""Tests for the FastAPI layer.

The news-search and LLM clients built in the lifespan are replaced with
in-memory fakes (patched where ``newsdesk.api.app`` looks them up), and
crawling is patched at its import sites.  No external services are required.
"""

from __future__ import annotations

from typing import Generator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from newsdesk.api.app import create_app
from newsdesk.errors import ConfigurationError, LlmError, NewsSearchError, QuotaExceededError
from newsdesk.news.models import NewsItem


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_ITEMS = [
    NewsItem(
        title="금리 동결",
        link="https://n.news.naver.com/article/1",
        original_link="https://news.example.com/1",
        description="한국은행이 금리를 동결했다.",
        pub_date="Mon, 05 Feb 2024 09:30:00 +0900",
    ),
    NewsItem(
        title="집값 상승",
        link="https://n.news.naver.com/article/2",
        original_link="https://news.example.com/2",
        description="서울 집값이 올랐다.",
        pub_date="Mon, 05 Feb 2024 08:00:00 +0900",
    ),
]


class _FakeNews:
    def __init__(self, items=None, error: Exception | None = None) -> None:
        self.items = list(_ITEMS if items is None else items)
        self.error = error
        self.queries: list[str] = []

    async def search(self, query: str) -> list[NewsItem]:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.items


def _fake_llm() -> MagicMock:
    llm = MagicMock()
    llm.summarize = AsyncMock(side_effect=lambda title, content, pub_date=None: f"{title} 요약")
    llm.sentiment = AsyncMock(return_value={"sentiment": "neutral", "score": 0.5})
    llm.extract_keywords = AsyncMock(return_value=["금리", "환율"])
    return llm


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fakes() -> dict:
    return {"news": _FakeNews(), "llm": _fake_llm()}


@pytest.fixture()
def client(fakes) -> Generator[TestClient, None, None]:
    """TestClient whose lifespan builds fake news / LLM clients."""
    with patch("newsdesk.api.app.NaverNewsClient", return_value=fakes["news"]), patch(
        "newsdesk.api.app.LlmClient", return_value=fakes["llm"]
    ):
        with TestClient(create_app(), raise_server_exceptions=True) as c:
            yield c


# ---------------------------------------------------------------------------
# Startup
# ---------------------------------------------------------------------------

def test_missing_credentials_fail_startup(monkeypatch) -> None:
    monkeypatch.setattr("newsdesk.config.settings.naver_client_id", "")
    monkeypatch.setattr("newsdesk.config.settings.naver_client_secret", "")
    with pytest.raises(ConfigurationError):
        with TestClient(create_app()):
            pass


def test_health(client) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


# ---------------------------------------------------------------------------
# /news
# ---------------------------------------------------------------------------

class TestNewsRoutes:
    def test_economy(self, client, fakes) -> None:
        resp = client.get("/news/economy")
        assert resp.status_code == 200
        data = resp.json()
        assert [d["title"] for d in data] == ["금리 동결", "집값 상승"]
        assert data[0]["original_link"] == "https://news.example.com/1"
        assert fakes["news"].queries == ["경제"]

    def test_estate(self, client, fakes) -> None:
        assert client.get("/news/estate").status_code == 200
        assert fakes["news"].queries == ["부동산"]

    def test_search(self, client, fakes) -> None:
        assert client.get("/news/search", params={"q": "반도체"}).status_code == 200
        assert fakes["news"].queries == ["반도체"]

    def test_search_requires_query(self, client) -> None:
        assert client.get("/news/search").status_code == 422

    def test_search_error_maps_to_502(self, client, fakes) -> None:
        fakes["news"].error = NewsSearchError("News search failed: 401")
        resp = client.get("/news/economy")
        assert resp.status_code == 502
        assert "401" in resp.json()["detail"]

    def test_analyzed(self, client, fakes) -> None:
        bodies = {"https://news.example.com/1": "본문 하나", "https://news.example.com/2": ""}
        with patch("newsdesk.news.analysis.fetch_many", AsyncMock(return_value=bodies)):
            resp = client.get("/news/economy/analyzed")

        assert resp.status_code == 200
        data = resp.json()
        assert [d["summary"] for d in data] == ["금리 동결 요약", "집값 상승 요약"]
        assert data[0]["content"] == "본문 하나"
        assert data[1]["content"] == ""
        assert data[0]["published"] == "2024년 2월 5일 (월) 09:30"

    def test_analyzed_quota_maps_to_429(self, client, fakes) -> None:
        fakes["llm"].summarize.side_effect = QuotaExceededError("The LLM quota has been exhausted.")
        with patch("newsdesk.news.analysis.fetch_many", AsyncMock(return_value={})):
            resp = client.get("/news/estate/analyzed")

        assert resp.status_code == 429
        assert "quota" in resp.json()["detail"]


# ---------------------------------------------------------------------------
# /llm
# ---------------------------------------------------------------------------

class TestLlmRoutes:
    def test_summarize(self, client, fakes) -> None:
        resp = client.post(
            "/llm/summarize",
            json={"title": "금리 동결", "content": "본문", "pub_date": "Mon, 05 Feb 2024 09:30:00 +0900"},
        )
        assert resp.status_code == 200
        assert resp.json() == {"summary": "금리 동결 요약"}
        fakes["llm"].summarize.assert_awaited_once_with(
            "금리 동결", "본문", "Mon, 05 Feb 2024 09:30:00 +0900"
        )

    def test_summarize_validates_body(self, client) -> None:
        assert client.post("/llm/summarize", json={"title": "x"}).status_code == 422

    def test_summarize_llm_error_maps_to_503(self, client, fakes) -> None:
        fakes["llm"].summarize.side_effect = LlmError("The LLM is rate-limited; try again later.")
        resp = client.post("/llm/summarize", json={"title": "t", "content": "c"})
        assert resp.status_code == 503

    def test_sentiment(self, client) -> None:
        resp = client.post("/llm/sentiment", json={"content": "본문"})
        assert resp.json() == {"sentiment": "neutral", "score": 0.5}

    def test_keywords(self, client) -> None:
        resp = client.post("/llm/keywords", json={"content": "본문"})
        assert resp.json() == {"keywords": ["금리", "환율"]}


# ---------------------------------------------------------------------------
# /crawl
# ---------------------------------------------------------------------------

class TestCrawlRoute:
    def test_crawl(self, client) -> None:
        mapping = {"https://a.example.com/1": "본문", "https://b.example.com/2": ""}
        with patch("newsdesk.api.routers.crawl.fetch_many", AsyncMock(return_value=mapping)) as fm:
            resp = client.get("/crawl", params=[("url", u) for u in mapping])

        assert resp.status_code == 200
        assert resp.json() == mapping
        assert fm.await_args.args[0] == list(mapping)

    def test_crawl_requires_url(self, client) -> None:
        assert client.get("/crawl").status_code == 422

    def test_crawl_caps_url_count(self, client) -> None:
        params = [("url", f"https://a.example.com/{i}") for i in range(51)]
        assert client.get("/crawl", params=params).status_code == 422

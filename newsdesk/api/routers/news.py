"""News endpoints — raw search results and LLM-analysed results.

Routes
------
GET /news/search?q=<query>
GET /news/economy
GET /news/estate
GET /news/economy/analyzed
GET /news/estate/analyzed
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel

from newsdesk.news.analysis import analyze_news
from newsdesk.news.client import ECONOMY_QUERY, REAL_ESTATE_QUERY

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class NewsItemResponse(BaseModel):
    title: str
    link: str
    original_link: str
    description: str
    pub_date: str


class AnalyzedNewsItemResponse(NewsItemResponse):
    content: str
    summary: str
    published: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _search(request: Request, query: str) -> list[dict[str, Any]]:
    items = await request.app.state.news.search(query)
    return [item.to_dict() for item in items]


async def _analyzed(request: Request, query: str) -> list[dict[str, Any]]:
    state = request.app.state
    items = await state.news.search(query)
    analyzed = await analyze_news(items, state.llm, client=state.http)
    return [item.to_dict() for item in analyzed]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/search", response_model=list[NewsItemResponse])
async def search_news(request: Request, q: str) -> list[dict[str, Any]]:
    """Search news for an arbitrary query, most relevant first."""
    return await _search(request, q)


@router.get("/economy", response_model=list[NewsItemResponse])
async def economy_news(request: Request) -> list[dict[str, Any]]:
    return await _search(request, ECONOMY_QUERY)


@router.get("/estate", response_model=list[NewsItemResponse])
async def estate_news(request: Request) -> list[dict[str, Any]]:
    return await _search(request, REAL_ESTATE_QUERY)


@router.get("/economy/analyzed", response_model=list[AnalyzedNewsItemResponse])
async def economy_news_analyzed(request: Request) -> list[dict[str, Any]]:
    """Economy news with crawled article text and an LLM summary per item."""
    return await _analyzed(request, ECONOMY_QUERY)


@router.get("/estate/analyzed", response_model=list[AnalyzedNewsItemResponse])
async def estate_news_analyzed(request: Request) -> list[dict[str, Any]]:
    """Real-estate news with crawled article text and an LLM summary per item."""
    return await _analyzed(request, REAL_ESTATE_QUERY)

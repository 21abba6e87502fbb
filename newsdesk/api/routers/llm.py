"""Single-article LLM endpoints.

Routes
------
POST /llm/summarize    Body: {"title": "...", "content": "...", "pub_date": "..."}
POST /llm/sentiment    Body: {"content": "..."}
POST /llm/keywords     Body: {"content": "..."}
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class SummarizeRequest(BaseModel):
    title: str
    content: str
    pub_date: Optional[str] = None


class SummarizeResponse(BaseModel):
    summary: str


class ContentRequest(BaseModel):
    content: str


class SentimentResponse(BaseModel):
    sentiment: str
    score: float


class KeywordsResponse(BaseModel):
    keywords: list[str]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/summarize", response_model=SummarizeResponse)
async def summarize(body: SummarizeRequest, request: Request) -> dict[str, Any]:
    summary = await request.app.state.llm.summarize(body.title, body.content, body.pub_date)
    return {"summary": summary}


@router.post("/sentiment", response_model=SentimentResponse)
async def sentiment(body: ContentRequest, request: Request) -> dict[str, Any]:
    return await request.app.state.llm.sentiment(body.content)


@router.post("/keywords", response_model=KeywordsResponse)
async def keywords(body: ContentRequest, request: Request) -> dict[str, Any]:
    return {"keywords": await request.app.state.llm.extract_keywords(body.content)}

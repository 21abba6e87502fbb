"""FastAPI application factory.

Lifespan
--------
On startup the app opens one ``httpx.AsyncClient`` for article crawling and
builds the news-search and LLM clients (``request.app.state.http``,
``.news`` and ``.llm``).  Missing credentials make startup fail with a
:class:`~newsdesk.errors.ConfigurationError`.  On shutdown the HTTP client is
closed.

Routers
-------
    /news    — search results and LLM-analysed search results
    /llm     — summarise / classify a single article
    /crawl   — extract article text from URLs
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from newsdesk.api.routers import crawl as crawl_router
from newsdesk.api.routers import llm as llm_router
from newsdesk.api.routers import news as news_router
from newsdesk.crawler.fetcher import build_client
from newsdesk.errors import (
    ConfigurationError,
    LlmError,
    NewsSearchError,
    QuotaExceededError,
)
from newsdesk.llm.client import LlmClient
from newsdesk.logging_setup import configure_logging
from newsdesk.news.client import NaverNewsClient


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the shared clients on startup and close them on shutdown."""
    http = build_client()
    try:
        app.state.http = http
        app.state.news = NaverNewsClient(http=http)
        app.state.llm = LlmClient()
        yield
    finally:
        await http.aclose()


def _error(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(QuotaExceededError)
    async def _quota(request: Request, exc: QuotaExceededError) -> JSONResponse:
        return _error(429, str(exc))

    @app.exception_handler(LlmError)
    async def _llm(request: Request, exc: LlmError) -> JSONResponse:
        return _error(503, str(exc))

    @app.exception_handler(NewsSearchError)
    async def _search(request: Request, exc: NewsSearchError) -> JSONResponse:
        return _error(502, str(exc))

    @app.exception_handler(ConfigurationError)
    async def _config(request: Request, exc: ConfigurationError) -> JSONResponse:
        return _error(500, str(exc))


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure_logging()
    app = FastAPI(
        title="newsdesk API",
        description=(
            "Read-only interface over Naver News search results, full-text "
            "article crawling, and LLM-generated summaries."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)

    app.include_router(news_router.router, prefix="/news", tags=["news"])
    app.include_router(llm_router.router, prefix="/llm", tags=["llm"])
    app.include_router(crawl_router.router, prefix="/crawl", tags=["crawl"])

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Module-level instance used by uvicorn:
#   uvicorn newsdesk.api.app:app --reload
app = create_app()

"""Crawl endpoint — article text for one or more URLs.

Routes
------
GET /crawl?url=<url>&url=<url>...
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request

from newsdesk.crawler import fetch_many

router = APIRouter()

_MAX_URLS = 50


@router.get("")
async def crawl(request: Request, url: list[str] = Query(...)) -> dict[str, str]:
    """Return ``{url: text}`` for every requested URL.

    URLs whose article could not be extracted map to ``""``.
    """
    if len(url) > _MAX_URLS:
        raise HTTPException(status_code=422, detail=f"At most {_MAX_URLS} URLs per request.")
    return await fetch_many(url, client=request.app.state.http)

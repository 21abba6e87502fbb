"""Concurrent article crawling.

``fetch_many`` launches one task per URL on the running event loop, with no
concurrency cap, and waits for every one of them.  Each task is isolated: a
network error, timeout, HTTP error, or parser failure on one URL is logged
and recorded as ``""`` for that URL only.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, Optional

import httpx

from newsdesk.config import settings
from newsdesk.crawler.extractor import extract_article
from newsdesk.crawler.fetcher import build_client, fetch_raw
from newsdesk.crawler.models import ExtractionOutcome

logger = logging.getLogger(__name__)

FAILED_LABEL = "failed"


async def fetch_article(client: httpx.AsyncClient, url: str) -> ExtractionOutcome:
    """Fetch and extract one article.  Never raises.

    The whole download is bounded by ``settings.request_timeout``; the
    client timeout alone only bounds each connect or read phase.
    """
    try:
        raw = await asyncio.wait_for(fetch_raw(client, url), settings.request_timeout)
        return extract_article(raw)
    except httpx.HTTPStatusError as exc:
        logger.warning("[crawler] HTTP %d for %s", exc.response.status_code, url)
    except (httpx.TimeoutException, asyncio.TimeoutError):
        logger.warning("[crawler] timed out: %s", url)
    except Exception as exc:  # noqa: BLE001
        logger.error("[crawler] failed to crawl %s: %r", url, exc)
    return ExtractionOutcome(url=url, text="", matched_strategy=FAILED_LABEL)


async def _gather(client: httpx.AsyncClient, urls: list[str]) -> Dict[str, str]:
    outcomes = await asyncio.gather(*(fetch_article(client, url) for url in urls))
    return {outcome.url: outcome.text for outcome in outcomes}


async def fetch_many(
    urls: Iterable[str],
    client: Optional[httpx.AsyncClient] = None,
) -> Dict[str, str]:
    """Crawl every URL in *urls* concurrently and map each to its text.

    Args:
        urls: Article URLs.  Duplicates are crawled once.
        client: Shared ``httpx.AsyncClient``.  When omitted a client is
            created for this batch and closed before returning.

    Returns:
        A dict with exactly one key per distinct input URL.  Failed URLs map
        to ``""``.
    """
    unique = list(dict.fromkeys(urls))
    if not unique:
        return {}

    if client is not None:
        mapping = await _gather(client, unique)
    else:
        async with build_client() as own_client:
            mapping = await _gather(own_client, unique)

    failed = sum(1 for text in mapping.values() if not text)
    logger.info("[crawler] crawled %d URL(s), %d without text.", len(mapping), failed)
    return mapping

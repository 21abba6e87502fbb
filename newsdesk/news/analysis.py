"""Search results → crawled bodies → LLM summaries.

Items keep the order the search API returned them in.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from newsdesk.crawler import fetch_many
from newsdesk.dates import format_korean_date
from newsdesk.errors import LlmError, QuotaExceededError
from newsdesk.llm.client import LlmClient
from newsdesk.news.models import AnalyzedNewsItem, NewsItem

logger = logging.getLogger(__name__)


async def analyze_news(
    items: list[NewsItem],
    llm: LlmClient,
    client: Optional[httpx.AsyncClient] = None,
) -> list[AnalyzedNewsItem]:
    """Crawl every item's article and attach an LLM summary.

    When an article body could not be crawled the search snippet is
    summarised instead.  A failed summary leaves ``summary`` empty for that
    item only.

    Raises:
        QuotaExceededError: Propagated as soon as it occurs.
    """
    bodies = await fetch_many([item.article_url for item in items], client=client)

    analyzed: list[AnalyzedNewsItem] = []
    for item in items:
        content = bodies.get(item.article_url, "")
        try:
            summary = await llm.summarize(item.title, content or item.description, item.pub_date)
        except QuotaExceededError:
            raise
        except LlmError as exc:
            logger.warning("[analysis] summary failed for %s: %s", item.article_url, exc)
            summary = ""
        analyzed.append(
            AnalyzedNewsItem(
                **item.to_dict(),
                content=content,
                summary=summary,
                published=format_korean_date(item.pub_date),
            )
        )

    logger.info(
        "[analysis] %d item(s), %d with crawled body, %d summarised.",
        len(analyzed),
        sum(1 for a in analyzed if a.content),
        sum(1 for a in analyzed if a.summary),
    )
    return analyzed

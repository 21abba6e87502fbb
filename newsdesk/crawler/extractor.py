"""Content extraction: turns a :class:`FetchResult` into an :class:`ExtractionOutcome`."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from newsdesk.crawler.boilerplate import strip_boilerplate
from newsdesk.crawler.encoding import decode_html, resolve_encoding
from newsdesk.crawler.locator import NOT_FOUND_LABEL, find_article
from newsdesk.crawler.models import ExtractionOutcome, FetchResult, Found
from newsdesk.crawler.postprocess import clean_text

logger = logging.getLogger(__name__)


def _hostname(url: str) -> str:
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def parse_html(raw: FetchResult) -> BeautifulSoup:
    """Decode *raw* with the resolved encoding and parse it."""
    encoding = resolve_encoding(raw.raw_bytes, raw.content_type, raw.url)
    html = decode_html(raw.raw_bytes, encoding)
    return BeautifulSoup(html, "html.parser")


def extract_article(raw: FetchResult) -> ExtractionOutcome:
    """Run the synchronous part of the pipeline over one fetched page.

    decode → parse → strip boilerplate → locate body → clean text

    Never raises for a page that simply has no recognisable article; the
    outcome's ``text`` is ``""`` instead.
    """
    soup = strip_boilerplate(parse_html(raw))
    result = find_article(soup, _hostname(raw.url))

    if not isinstance(result, Found):
        logger.warning(
            "[crawler] no article body: %s | strategy=%s | longest=%d",
            raw.url,
            result.strategy,
            result.best_length,
        )
        return ExtractionOutcome(url=raw.url, text="", matched_strategy=NOT_FOUND_LABEL)

    text = clean_text(result.text)
    logger.debug(
        "[crawler] extracted %s | strategy=%s | length=%d",
        raw.url,
        result.strategy,
        len(text),
    )
    if not text:
        # The whole body was footer material.
        logger.warning(
            "[crawler] body emptied by cleanup: %s | strategy=%s | raw length=%d",
            raw.url,
            result.strategy,
            len(result.text),
        )
        return ExtractionOutcome(url=raw.url, text="", matched_strategy=NOT_FOUND_LABEL)
    return ExtractionOutcome(url=raw.url, text=text, matched_strategy=result.strategy)

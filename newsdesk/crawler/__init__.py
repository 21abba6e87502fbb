"""Crawler package — article fetch, encoding, extraction & cleanup."""

from newsdesk.crawler.batch import fetch_article, fetch_many
from newsdesk.crawler.extractor import extract_article
from newsdesk.crawler.fetcher import build_client, fetch_raw
from newsdesk.crawler.models import ExtractionOutcome, FetchResult, SiteRule
from newsdesk.crawler.postprocess import clean_text

__all__ = [
    "fetch_many",
    "fetch_article",
    "extract_article",
    "fetch_raw",
    "build_client",
    "clean_text",
    "FetchResult",
    "ExtractionOutcome",
    "SiteRule",
]

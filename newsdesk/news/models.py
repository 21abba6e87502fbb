"""Data models for news search results."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class NewsItem:
    """One search hit, with markup already stripped from the text fields."""

    title: str
    link: str
    description: str
    pub_date: str
    original_link: str = ""

    @property
    def article_url(self) -> str:
        """The publisher's own URL when known, else the portal link."""
        return self.original_link or self.link

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class AnalyzedNewsItem(NewsItem):
    """A :class:`NewsItem` with its crawled body and LLM summary."""

    content: str = ""
    summary: str = ""
    published: str = ""

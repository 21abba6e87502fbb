"""News search package — Naver News client and LLM analysis."""

from newsdesk.news.analysis import analyze_news
from newsdesk.news.client import NaverNewsClient
from newsdesk.news.models import AnalyzedNewsItem, NewsItem

__all__ = ["NaverNewsClient", "analyze_news", "NewsItem", "AnalyzedNewsItem"]

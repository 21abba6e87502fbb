"""Locate the article body inside a stripped document.

Three strategies are tried in order and the first hit wins:

1. the publisher's :class:`~newsdesk.crawler.models.SiteRule`, if any,
2. a sweep over common article-container selectors,
3. the structural ``article`` / ``main`` / ``[role=article]`` elements.

Each strategy is a plain ``(soup) -> Found | NotFound`` function so it can be
tested on its own.  Nothing is scored: within a strategy the first selector
that passes the filter is taken.
"""

from __future__ import annotations

import re
from functools import partial
from typing import Callable, List, Optional, Tuple

from bs4 import BeautifulSoup

from newsdesk.crawler.boilerplate import remove_selectors
from newsdesk.crawler.models import Found, LocateResult, NotFound, SiteRule
from newsdesk.crawler.site_rules import find_site_rule

MIN_ARTICLE_LENGTH = 100

NOT_FOUND_LABEL = "not-found"

GENERIC_SELECTORS = (
    "article#articleBodyContents",
    "#articleBodyContents",
    ".article_body",
    ".article-body",
    "#articleBody",
    ".articleBody",
    "#newsEndContents",
    ".news_end_body",
    ".article_view",
    "#article-view-content-div",
    "._article_body_contents",
    ".article-content",
    "#article-view",
    ".article_view_box",
    "#article_body",
    ".news_view_body",
    ".article_view_body",
)

STRUCTURAL_SELECTORS = ("article", "main", '[role="article"]')

_NON_ARTICLE_WORDS = ("메뉴", "요약", "menu", "navigation", "summary")
# Bare Hangul without a single digit or punctuation mark reads like a photo
# caption or a link list, not prose.
_HANGUL_ONLY = re.compile(r"^[가-힣\s]+$")

Strategy = Callable[[BeautifulSoup], LocateResult]


def select_text(soup: BeautifulSoup, selector: str) -> str:
    """Text of the first element matching *selector*, or ``""``."""
    element = soup.select_one(selector)
    if element is None:
        return ""
    return element.get_text(" ", strip=True)


def looks_like_non_article(text: str) -> bool:
    lowered = text.lower()
    if any(word in lowered for word in _NON_ARTICLE_WORDS):
        return True
    return bool(_HANGUL_ONLY.match(text))


def is_article_text(text: str) -> bool:
    return len(text) > MIN_ARTICLE_LENGTH and not looks_like_non_article(text)


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

def apply_site_rule(rule: SiteRule, soup: BeautifulSoup) -> LocateResult:
    """Run *rule* against *soup*.

    The first selector with any text at all is the rule's answer, even when it
    turns out too short to accept.
    """
    label = f"{rule.name}: site rule"
    for selector in rule.strip_selectors:
        remove_selectors(soup, selector)

    for selector in rule.selectors:
        text = select_text(soup, selector)
        if not text:
            continue
        for post_filter in rule.post_filters:
            text = post_filter(text)
        text = text.strip()
        label = f"{rule.name}: {selector}"
        if len(text) > MIN_ARTICLE_LENGTH:
            return Found(text=text, strategy=label)
        return NotFound(strategy=label, best_length=len(text))

    return NotFound(strategy=label)


def _sweep(selectors, label: str, soup: BeautifulSoup) -> LocateResult:
    best = 0
    for selector in selectors:
        text = select_text(soup, selector)
        if is_article_text(text):
            return Found(text=text, strategy=f"{label}: {selector}")
        best = max(best, len(text))
    return NotFound(strategy=label, best_length=best)


generic_sweep: Strategy = partial(_sweep, GENERIC_SELECTORS, "general")
structural_fallback: Strategy = partial(_sweep, STRUCTURAL_SELECTORS, "fallback")


def strategies_for(hostname: str) -> List[Strategy]:
    """Ordered strategy list for a page served from *hostname*."""
    strategies: List[Strategy] = []
    rule: Optional[SiteRule] = find_site_rule(hostname)
    if rule is not None:
        strategies.append(partial(apply_site_rule, rule))
    strategies.append(generic_sweep)
    strategies.append(structural_fallback)
    return strategies


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def find_article(soup: BeautifulSoup, hostname: str) -> LocateResult:
    """Return the first :class:`Found` among the strategies for *hostname*.

    On a miss the returned :class:`NotFound` carries the last strategy tried
    and the longest text any strategy saw, for logging.
    """
    best = 0
    last = NOT_FOUND_LABEL
    for strategy in strategies_for(hostname):
        result = strategy(soup)
        if isinstance(result, Found):
            return result
        best = max(best, result.best_length)
        last = result.strategy
    return NotFound(strategy=last, best_length=best)


def locate(soup: BeautifulSoup, hostname: str) -> Tuple[str, str]:
    """Return ``(text, strategy_label)``; ``("", "not-found")`` on a miss."""
    result = find_article(soup, hostname)
    if isinstance(result, Found):
        return result.text, result.strategy
    return "", NOT_FOUND_LABEL

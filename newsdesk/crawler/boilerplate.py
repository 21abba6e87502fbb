"""DOM-level removal of everything that is not article text."""

from __future__ import annotations

from bs4 import BeautifulSoup

# Tags that never contain article prose.
_STRIP_TAGS = ["script", "style", "noscript", "iframe", "nav", "header", "footer"]

# Navigation, ads, sidebars, related-article blocks, comments and the inline
# "AI summary" widgets several publishers inject above the body.
_STRIP_SELECTORS = ", ".join(
    [
        ".ad",
        ".advertisement",
        ".ad-banner",
        ".menu",
        ".navigation",
        ".sidebar",
        ".related",
        ".recommend",
        ".summary",
        ".ai-summary",
        ".news_summary",
        ".article_recommend",
        ".article_relation",
        ".article_tag",
        ".article_share",
        ".comment",
        ".reply",
        '[role="navigation"]',
        '[role="complementary"]',
    ]
)


def remove_selectors(soup: BeautifulSoup, selectors: str) -> int:
    """Decompose every element matching *selectors*; return how many went."""
    removed = 0
    for element in soup.select(selectors):
        # A parent matched earlier may already have taken this one with it.
        if element.decomposed:
            continue
        element.decompose()
        removed += 1
    return removed


def strip_boilerplate(soup: BeautifulSoup) -> BeautifulSoup:
    """Remove non-article structure from *soup* in place and return it.

    Running it twice is a no-op the second time.
    """
    for tag in soup(_STRIP_TAGS):
        if not tag.decomposed:
            tag.decompose()
    remove_selectors(soup, _STRIP_SELECTORS)
    return soup

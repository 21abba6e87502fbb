"""Per-publisher extraction rules.

Article containers are not marked up consistently across Korean news sites,
so the publishers we see most often get an explicit rule.  Rules are matched
by hostname in table order; the first match is the only one applied.
``mbn.mk.co.kr`` therefore sits above ``mk.co.kr``.
"""

from __future__ import annotations

from functools import partial
from typing import Callable, Optional

from newsdesk.crawler.models import SiteRule
from newsdesk.crawler.postprocess import truncate_at


def host_is(*domains: str) -> Callable[[str], bool]:
    """Predicate matching *domains* and any of their subdomains."""

    def _match(hostname: str) -> bool:
        hostname = hostname.lower()
        return any(hostname == d or hostname.endswith("." + d) for d in domains)

    return _match


def _cut(marker: str) -> Callable[[str], str]:
    return partial(truncate_at, marker=marker)


SITE_RULES: tuple[SiteRule, ...] = (
    SiteRule(
        name="segye.com",
        domain_match=host_is("segye.com"),
        selectors=("#articleBodyContents", ".article_body"),
    ),
    SiteRule(
        name="hankyung.com",
        domain_match=host_is("hankyung.com"),
        selectors=("#articleBody", ".article-body", "#newsEndContents"),
    ),
    SiteRule(
        name="mbn.mk.co.kr",
        domain_match=host_is("mbn.mk.co.kr"),
        selectors=(".article_view", ".article-body", "#articleBody"),
    ),
    SiteRule(
        name="mk.co.kr",
        domain_match=host_is("mk.co.kr"),
        selectors=("#article_body", ".news_view_body", "#newsEndContents", ".article_view"),
        post_filters=(
            _cut("AI가 뉴스를 읽고"),
            _cut("기사 속 종목 이야기"),
            _cut("이 기사가 마음에 들었다면"),
        ),
    ),
    SiteRule(
        name="busan.com",
        domain_match=host_is("busan.com"),
        selectors=(".article_view_box", "#article-view-content-div"),
    ),
    SiteRule(
        name="edaily.co.kr",
        domain_match=host_is("edaily.co.kr"),
        selectors=(
            "#articleBody",
            ".article_body",
            ".news_view_body",
            "#newsEndContents",
            ".article_view",
            ".article-content",
            "#content",
            ".content",
            '[class*="article"]',
            '[id*="article"]',
            "main",
        ),
        strip_selectors=(".gnb", ".lnb"),
    ),
    SiteRule(
        name="kookje.co.kr",
        domain_match=host_is("kookje.co.kr"),
        selectors=(
            "#articleBody",
            ".article_body",
            ".news_view_body",
            ".article_view",
            "#newsEndContents",
            ".article-content",
            '[class*="article"]',
            '[id*="article"]',
        ),
    ),
    SiteRule(
        name="yna.co.kr",
        domain_match=host_is("yna.co.kr"),
        selectors=("#articleBody", ".article_body", ".news_view_body", "#article-view", ".article_view"),
        post_filters=(_cut("관련 뉴스"), _cut("제보는 카카오톡")),
        strip_selectors=(".article_summary",),
    ),
)


def find_site_rule(hostname: str, rules=SITE_RULES) -> Optional[SiteRule]:
    """Return the first rule matching *hostname*, or ``None``."""
    for rule in rules:
        if rule.matches(hostname):
            return rule
    return None

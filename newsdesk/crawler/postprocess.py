"""Plain-text cleanup applied to every extracted article body.

``clean_text`` is the last step of the pipeline.  It catches boilerplate that
slipped through DOM-level stripping, typically when several nodes were joined
into one string by a generic selector.
"""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")

# Script and markup remnants that survive ``get_text``, plus inline widget
# blocks that open with a marker and close with a button label.
_REMNANT_PATTERNS = [
    re.compile(r"<!--.*?-->", re.DOTALL),
    re.compile(r"googletag\..*?;", re.DOTALL),
    re.compile(r"document\.addEventListener.*?\);", re.DOTALL),
    re.compile(r"세 줄 요약.*?닫기", re.DOTALL),
    re.compile(r"AI 요약.*?닫기", re.DOTALL),
    re.compile(r"요약쏙.*?닫기", re.DOTALL),
    re.compile(r"최신뉴스.*?송고", re.DOTALL),
]

# Everything from the first of these onward is footer material.
TRAILING_MARKERS = (
    "Copyright",
    "저작권자",
    "무단 전재",
    "무단전재",
    "무단 복제",
    "무단복제",
    "세 줄 요약",
    "AI 요약",
    "관련 뉴스",
    "관련기사",
    "제보는 카카오톡",
    "이 기사가 마음에 들었다면",
    "기사 속 종목 이야기",
    "AI가 뉴스를 읽고",
)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text)


def truncate_at(text: str, marker: str) -> str:
    """Drop *marker* and everything after it."""
    index = text.find(marker)
    return text if index < 0 else text[:index]


def truncate_at_markers(text: str, markers=TRAILING_MARKERS) -> str:
    for marker in markers:
        text = truncate_at(text, marker)
    return text


def _remove_remnants(text: str) -> str:
    # Removing one fragment can splice together another, so repeat until
    # nothing matches.
    while True:
        previous = text
        for pattern in _REMNANT_PATTERNS:
            text = pattern.sub("", text)
        text = collapse_whitespace(text)
        if text == previous:
            return text


def clean_text(text: str) -> str:
    """Normalise *text* and cut trailing boilerplate.  Idempotent."""
    text = collapse_whitespace(text)
    text = _remove_remnants(text)
    text = truncate_at_markers(text)
    return text.strip()

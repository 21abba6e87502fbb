"""Date formatting for Korean-language output."""

from __future__ import annotations

from datetime import datetime
from email.utils import parsedate_to_datetime

_WEEKDAYS = ["월", "화", "수", "목", "금", "토", "일"]


def _parse(value: str) -> datetime:
    # The search API emits RFC 822 dates ("Mon, 05 Feb 2024 09:30:00 +0900");
    # ISO 8601 is accepted too.
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return datetime.fromisoformat(value)


def format_korean_date(value: str) -> str:
    """Render *value* as ``2024년 2월 5일 (월) 09:30``.

    The wall-clock time is kept in the offset the date was written in.
    Unparseable input is returned unchanged.
    """
    try:
        parsed = _parse(value.strip())
    except (TypeError, ValueError, AttributeError):
        return value
    weekday = _WEEKDAYS[parsed.weekday()]
    return (
        f"{parsed.year}년 {parsed.month}월 {parsed.day}일 ({weekday}) "
        f"{parsed.hour:02d}:{parsed.minute:02d}"
    )

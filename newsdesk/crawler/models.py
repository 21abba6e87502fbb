"""Data models for the article crawler pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple, Union

TextFilter = Callable[[str], str]


@dataclass(frozen=True)
class FetchResult:
    """The raw HTTP response for a single article fetch."""

    url: str
    raw_bytes: bytes
    content_type: str = ""
    status_code: int = 200


@dataclass(frozen=True)
class ExtractionOutcome:
    """Extracted article text for one URL.

    ``text == ""`` means nothing usable was found; there is no separate error
    type for that case.  ``matched_strategy`` is for diagnostics only.
    """

    url: str
    text: str
    matched_strategy: str


@dataclass(frozen=True)
class SiteRule:
    """Extraction rule for one publisher.

    ``selectors`` are tried in order; the first one yielding any text wins.
    ``post_filters`` run over that text afterwards.  ``strip_selectors`` are
    removed from the document before the selectors are tried.
    """

    name: str
    domain_match: Callable[[str], bool]
    selectors: Tuple[str, ...]
    post_filters: Tuple[TextFilter, ...] = ()
    strip_selectors: Tuple[str, ...] = ()

    def matches(self, hostname: str) -> bool:
        return self.domain_match(hostname)


@dataclass(frozen=True)
class Found:
    """A strategy located article text."""

    text: str
    strategy: str


@dataclass(frozen=True)
class NotFound:
    """A strategy found nothing usable."""

    strategy: str
    best_length: int = 0


LocateResult = Union[Found, NotFound]

"""Exception types shared across the newsdesk backend."""

from __future__ import annotations


class NewsdeskError(Exception):
    """Base class for all errors raised by newsdesk."""


class ConfigurationError(NewsdeskError):
    """A required setting (usually a credential) is missing or invalid.

    Raised at construction time so that a misconfigured component refuses to
    start instead of failing on every call.
    """


class NewsSearchError(NewsdeskError):
    """The news search API returned an error or an unreadable payload."""


class LlmError(NewsdeskError):
    """The LLM call failed after all retries were spent."""


class QuotaExceededError(LlmError):
    """The LLM account has no remaining quota.  Never retried."""

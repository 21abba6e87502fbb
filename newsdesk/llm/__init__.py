"""LLM summarisation package."""

from newsdesk.llm.client import LlmClient

__all__ = ["LlmClient"]

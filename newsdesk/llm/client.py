"""LLM-backed summarisation and analysis of news articles.

Provider
--------
``openai`` (default)
    LangChain ``ChatOpenAI``.  Requires ``OPENAI_API_KEY``.
``ollama``
    LangChain ``ChatOllama`` against ``OLLAMA_BASE_URL``.

Retries
-------
Rate-limit responses are retried up to ``settings.llm_max_retries`` times
with exponential backoff (``base_delay * 2 ** attempt``).  A rate-limit error
whose code is ``insufficient_quota`` means the account is out of credit: it
is raised immediately as :class:`~newsdesk.errors.QuotaExceededError`.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any, Awaitable, Callable, Optional

import openai
from langchain_core.messages import HumanMessage, SystemMessage

from newsdesk.config import settings
from newsdesk.dates import format_korean_date
from newsdesk.errors import ConfigurationError, LlmError, QuotaExceededError

logger = logging.getLogger(__name__)

# Long bodies add cost without improving a 3-4 sentence summary.
_MAX_BODY_CHARS = 4000

_SUMMARY_SYSTEM = "너는 경제 전문 기자야."
_QUOTA_CODE = "insufficient_quota"
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def _get_llm() -> Any:
    """Return a configured LangChain chat model based on ``settings``.

    Raises:
        ConfigurationError: If the OpenAI provider is selected without a key.
    """
    if settings.llm_provider == "ollama":
        from langchain_ollama import ChatOllama

        return ChatOllama(
            model=settings.ollama_chat_model,
            base_url=settings.ollama_base_url,
            temperature=0,
        )

    if not settings.openai_api_key:
        raise ConfigurationError(
            "OPENAI_API_KEY is not set. Set it or switch to LLM_PROVIDER=ollama."
        )

    from langchain_openai import ChatOpenAI

    # Retries are handled here, not inside the SDK.
    return ChatOpenAI(
        model=settings.openai_chat_model,
        api_key=settings.openai_api_key,
        temperature=0,
        max_retries=0,
    )


def is_quota_error(exc: Exception) -> bool:
    """``True`` if *exc* reports an exhausted quota rather than a rate limit."""
    if getattr(exc, "code", None) == _QUOTA_CODE:
        return True
    return _QUOTA_CODE in str(exc)


def _clip(text: str) -> str:
    return text[:_MAX_BODY_CHARS]


class LlmClient:
    """Thin async wrapper over a LangChain chat model.

    Args:
        llm: Any object with an async ``ainvoke(messages)`` method.  Built from
            ``settings`` when omitted.
        max_retries: Rate-limit retries before giving up.
        base_delay: First backoff delay in seconds.
        sleep: Coroutine used to wait between retries.
    """

    def __init__(
        self,
        llm: Any = None,
        max_retries: Optional[int] = None,
        base_delay: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._llm = llm if llm is not None else _get_llm()
        self._max_retries = settings.llm_max_retries if max_retries is None else max_retries
        self._base_delay = settings.llm_retry_base_delay if base_delay is None else base_delay
        self._sleep = sleep

    async def complete(self, messages: list[Any]) -> str:
        """Send *messages* and return the reply text.

        Raises:
            QuotaExceededError: The account has no quota left.
            LlmError: Rate-limit retries ran out, or the call failed otherwise.
        """
        for attempt in range(self._max_retries + 1):
            try:
                response = await self._llm.ainvoke(messages)
            except openai.RateLimitError as exc:
                if is_quota_error(exc):
                    logger.error("[llm] quota exhausted: %s", exc)
                    raise QuotaExceededError(
                        "The LLM quota has been exhausted. Check the plan and billing details."
                    ) from exc
                if attempt >= self._max_retries:
                    logger.error("[llm] still rate-limited after %d retries.", self._max_retries)
                    raise LlmError("The LLM is rate-limited; try again later.") from exc
                delay = self._base_delay * (2 ** attempt)
                logger.warning(
                    "[llm] rate-limited (attempt %d/%d); retrying in %.1fs …",
                    attempt + 1,
                    self._max_retries,
                    delay,
                )
                await self._sleep(delay)
                continue
            except Exception as exc:
                logger.error("[llm] request failed: %s", exc)
                raise LlmError(f"LLM request failed: {exc}") from exc

            content = response.content if hasattr(response, "content") else str(response)
            return str(content).strip()

        # Unreachable: the loop either returns or raises.
        raise LlmError("LLM request failed.")

    async def summarize(self, title: str, content: str, pub_date: Optional[str] = None) -> str:
        """Return a 3-4 sentence Korean summary of an article."""
        lines = ["다음 경제 뉴스를 3~4문장으로 요약해줘.", f"제목: {title}"]
        if pub_date:
            lines.append(f"날짜: {format_korean_date(pub_date)}")
        lines.append(f"내용: {_clip(content)}")
        return await self.complete(
            [SystemMessage(content=_SUMMARY_SYSTEM), HumanMessage(content="\n".join(lines))]
        )

    async def sentiment(self, content: str) -> dict[str, Any]:
        """Classify the tone of an article.

        Returns:
            ``{"sentiment": "positive"|"neutral"|"negative", "score": float}``

        Raises:
            LlmError: If the reply does not contain a JSON object.
        """
        prompt = (
            "다음 뉴스 내용의 감정을 분석해.\n"
            "결과는 JSON 형태로만 답해.\n"
            '{"sentiment": "positive|neutral|negative", "score": number(0~1)}\n'
            f"뉴스: {_clip(content)}"
        )
        raw = await self.complete([HumanMessage(content=prompt)])
        match = _JSON_OBJECT.search(raw)
        try:
            data = json.loads(match.group(0) if match else raw)
            return {"sentiment": str(data["sentiment"]), "score": float(data["score"])}
        except (ValueError, KeyError, TypeError) as exc:
            raise LlmError(f"Unreadable sentiment reply: {raw[:200]!r}") from exc

    async def extract_keywords(self, content: str, limit: int = 5) -> list[str]:
        """Return up to *limit* keywords, most relevant first."""
        prompt = (
            f"뉴스의 핵심 키워드를 관련도 순으로 {limit}개만 쉼표로 구분해서 추출해줘.\n"
            f"{_clip(content)}"
        )
        raw = await self.complete([HumanMessage(content=prompt)])
        keywords = [k.strip() for k in raw.split(",")]
        return [k for k in keywords if k][:limit]

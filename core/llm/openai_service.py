"""
OpenAI Service - LLM implementation using OpenAI API.

Provides embedding generation for semantic scoring and short match
explanations for notable scores.
"""
from typing import Dict, Any, List, Optional
import logging
import re

import openai
from openai import OpenAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity import RetryCallState

from core.exceptions import ProviderFailureException
from core.llm.interfaces import SimilarityProvider, ExplanationProvider
from core.llm.system_prompts import (
    MATCH_EXPLANATION_SYSTEM_PROMPT,
    build_explanation_user_message,
)

logger = logging.getLogger(__name__)

# Scoring runs inside a user request, so keep retries short.
MAX_ATTEMPTS = 3
MAX_WAIT_SECONDS = 8


# ---------------------------------------------------------------------------
# Retry helpers
# ---------------------------------------------------------------------------

RETRYABLE_ERRORS = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    if isinstance(exc, openai.RateLimitError):
        logger.warning(
            "Rate limit hit (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )
    else:
        logger.warning(
            "Transient API error (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )


def _parse_reset_duration(value: str) -> float:
    """Parse an OpenAI reset-timer header value like '1s', '500ms', '1m30s' into seconds."""
    total = 0.0
    for amount, unit in re.findall(r"([\d.]+)(ms|s|m|h)", value):
        a = float(amount)
        if unit == "ms":
            total += a / 1000
        elif unit == "s":
            total += a
        elif unit == "m":
            total += a * 60
        else:  # h
            total += a * 3600
    return total


def _wait_from_rate_limit_headers(exc: openai.RateLimitError) -> float:
    """Extract the longest declared wait from rate-limit response headers.

    Reads ``retry-after`` and the OpenAI ``x-ratelimit-reset-*`` headers and
    returns the maximum, or 0.0 if no usable header is present.
    """
    try:
        headers = exc.response.headers
        candidates: List[float] = []

        retry_after = headers.get("retry-after", "")
        if retry_after:
            try:
                candidates.append(float(retry_after))
            except ValueError:
                pass

        for header in ("x-ratelimit-reset-requests", "x-ratelimit-reset-tokens"):
            parsed = _parse_reset_duration(headers.get(header, ""))
            if parsed > 0:
                candidates.append(parsed)

        return max(candidates) if candidates else 0.0
    except Exception:
        return 0.0


def _wait_respecting_retry_after(retry_state: RetryCallState) -> float:
    """Return how long tenacity should sleep before the next attempt.

    Rate limits honour server-declared timers (capped); everything else uses
    capped exponential backoff.
    """
    exc = retry_state.outcome.exception()
    if isinstance(exc, openai.RateLimitError):
        wait = _wait_from_rate_limit_headers(exc)
        if wait > 0:
            return min(wait, MAX_WAIT_SECONDS)

    exp = wait_exponential(multiplier=0.5, min=0.5, max=MAX_WAIT_SECONDS)
    return exp(retry_state)


def _llm_retry(**kwargs):
    """Return a tenacity @retry decorator for LLM API calls."""
    return retry(
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        wait=_wait_respecting_retry_after,
        stop=stop_after_attempt(MAX_ATTEMPTS),
        before_sleep=_log_retry,
        reraise=True,
        **kwargs,
    )


class OpenAIService(SimilarityProvider, ExplanationProvider):
    """
    OpenAI LLM Service.

    Implements both scoring capabilities on one client. Errors that survive
    the retry policy are raised as ProviderFailureException so callers only
    deal with one failure type.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model_config: Optional[Dict[str, Any]] = None,
        timeout_seconds: float = 20.0,
        client: Optional[OpenAI] = None
    ):
        if client is None:
            client_kwargs: Dict[str, Any] = {'timeout': timeout_seconds, 'max_retries': 0}
            if api_key:
                client_kwargs['api_key'] = api_key
            if base_url:
                client_kwargs['base_url'] = base_url
            client = OpenAI(**client_kwargs)
        self.client = client

        self.model_config = model_config or {}
        self.embedding_model = self.model_config.get('embedding_model', 'text-embedding-3-small')
        self.embedding_dimensions = self.model_config.get('embedding_dimensions')
        self.explanation_model = self.model_config.get('explanation_model', 'gpt-4o-mini')
        self.explanation_temperature = self.model_config.get('explanation_temperature', 0.3)

    @_llm_retry()
    def _create_embedding(self, text: str) -> List[float]:
        kwargs: Dict[str, Any] = {'input': text, 'model': self.embedding_model}
        if self.embedding_dimensions:
            kwargs['dimensions'] = self.embedding_dimensions
        response = self.client.embeddings.create(**kwargs)
        return response.data[0].embedding

    @_llm_retry()
    def _create_explanation(self, messages: List[Dict[str, str]]) -> str:
        response = self.client.chat.completions.create(
            model=self.explanation_model,
            messages=messages,
            temperature=self.explanation_temperature,
        )
        return response.choices[0].message.content

    def embed(self, text: str) -> List[float]:
        """Generate embedding vector for text."""
        try:
            return list(self._create_embedding(text))
        except (openai.OpenAIError, IndexError, AttributeError) as e:
            raise ProviderFailureException(f"Embedding request failed: {e}") from e

    def explain(self, title: str, description: str, resume_text: str, score: int) -> str:
        """Ask the chat model for a 2-3 sentence rationale."""
        messages = [
            {"role": "system", "content": MATCH_EXPLANATION_SYSTEM_PROMPT},
            {"role": "user", "content": build_explanation_user_message(
                title, description or "", resume_text, score
            )},
        ]
        try:
            content = self._create_explanation(messages)
        except (openai.OpenAIError, IndexError, AttributeError) as e:
            raise ProviderFailureException(f"Explanation request failed: {e}") from e

        if not content or not content.strip():
            raise ProviderFailureException("Explanation request returned empty content")
        return content.strip()

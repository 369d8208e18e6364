"""Thin wrapper around the OpenAI chat completions API."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

import openai

from fitplan.core.config import get_settings

logger = logging.getLogger(__name__)


class CompletionError(RuntimeError):
    """The completion service could not produce a reply."""


class CompletionClient:
    """Send one free-text instruction and return the generated text."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: str = "gpt-3.5-turbo",
        timeout: float = 30.0,
        client: Any = None,
    ) -> None:
        self.model = model
        self.timeout = timeout
        if client is not None:
            self._client = client
        elif api_key:
            self._client = openai.OpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        else:
            self._client = None

    @property
    def configured(self) -> bool:
        return self._client is not None

    def complete(self, prompt: str, *, json_response: bool = False) -> str:
        """
        Return the model's reply to ``prompt``.

        ``json_response`` asks the service for a JSON object; the reply is still
        returned as raw text so callers decide how to parse it. Every failure,
        including a missing API key, surfaces as :class:`CompletionError`.
        """
        if self._client is None:
            raise CompletionError("OPENAI_API_KEY is not configured")

        request: Dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if json_response:
            request["response_format"] = {"type": "json_object"}

        try:
            completion = self._client.chat.completions.create(**request)
        except openai.OpenAIError as exc:
            raise CompletionError(f"Completion request failed: {exc}") from exc

        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""


@lru_cache
def _default_client() -> CompletionClient:
    settings = get_settings()
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY missing; plan requests will return fallback results.")
    return CompletionClient(
        settings.openai_api_key,
        model=settings.openai_model,
        timeout=settings.openai_timeout_seconds,
    )


def get_completion_client() -> CompletionClient:
    """FastAPI dependency returning the process-wide completion client."""
    return _default_client()

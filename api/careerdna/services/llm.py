from __future__ import annotations

import logging
import re
from typing import Any, Sequence

import httpx
from openai import DefaultHttpxClient, OpenAI, OpenAIError

from ..config import FALLBACK_MODELS, OPENAI_API_KEY, OPENAI_MODEL, OPENAI_TEMPERATURE, OPENAI_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

PLACEHOLDER_SUMMARY = "# Summary\n\n1) Placeholder summary while developing without an API key."

_NO_TEMPERATURE_RE = re.compile(r"^gpt-5($|[-_])")


class ProseGenerationError(RuntimeError):
    def __init__(self, message: str, *, attempts: Sequence[tuple[str, str]] = ()):
        super().__init__(message)
        self.attempts = list(attempts)


def model_supports_temperature(model: str) -> bool:
    return not _NO_TEMPERATURE_RE.match(model)


def model_chain(preferred: str | None, fallbacks: Sequence[str] = FALLBACK_MODELS) -> list[str]:
    chain: list[str] = []
    for m in (preferred, *fallbacks):
        if m and m not in chain:
            chain.append(m)
    return chain


def _content_of(resp: Any) -> str:
    choices = getattr(resp, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content.strip() if isinstance(content, str) else ""


class ProseGenerator:
    """Chat-completions client that walks a model chain until one answers."""

    def __init__(
        self,
        api_key: str = OPENAI_API_KEY,
        *,
        model: str | None = OPENAI_MODEL,
        fallback_models: Sequence[str] = FALLBACK_MODELS,
        temperature: float = OPENAI_TEMPERATURE,
        timeout_seconds: float = OPENAI_TIMEOUT_SECONDS,
        client: Any | None = None,
    ):
        self.api_key = api_key
        self.models = model_chain(model, fallback_models)
        self.temperature = temperature
        self.timeout_seconds = timeout_seconds
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            http_client = DefaultHttpxClient(
                timeout=httpx.Timeout(self.timeout_seconds, connect=10.0)
            )
            self._client = OpenAI(api_key=self.api_key, http_client=http_client, max_retries=1)
        return self._client

    def generate(self, prompt: str) -> str:
        if not self.api_key and self._client is None:
            logger.warning("[llm] OPENAI_API_KEY missing; returning placeholder summary")
            return PLACEHOLDER_SUMMARY

        messages = [{"role": "user", "content": prompt}]
        attempts: list[tuple[str, str]] = []
        for model in self.models:
            payload: dict[str, Any] = {"model": model, "messages": messages}
            if model_supports_temperature(model):
                payload["temperature"] = self.temperature
            try:
                resp = self.client.chat.completions.create(**payload)
            except OpenAIError as exc:
                logger.warning("[llm] model failed: %s (%s)", model, exc)
                attempts.append((model, str(exc)))
                continue
            content = _content_of(resp)
            if not content:
                logger.warning("[llm] model returned empty content: %s", model)
                attempts.append((model, "empty content"))
                continue
            logger.info("[llm] summary generated by %s (%d chars)", model, len(content))
            return content

        raise ProseGenerationError("All models failed", attempts=attempts)

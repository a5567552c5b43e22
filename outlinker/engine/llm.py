"""Generative client handle used by the fallback search path and summaries."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Protocol

import httpx

from .errors import GenerationError, GenerationRateLimited

logger = logging.getLogger(__name__)

_RATE_LIMIT_RE = re.compile(r"\b429\b|quota|rate[ _-]?limit|resource[ _]exhausted", re.IGNORECASE)


class GenerativeClient(Protocol):
    """Anything that turns a prompt into text."""

    def generate(
        self,
        prompt: str,
        *,
        web_search: bool = False,
        json_output: bool = False,
        temperature: float | None = None,
    ) -> str: ...


def is_rate_limit_message(message: str) -> bool:
    return bool(_RATE_LIMIT_RE.search(message or ""))


class GeminiClient:
    """Gemini ``generateContent`` REST client.

    The Google Search tool is attached when ``web_search`` is requested. A
    fresh ``httpx.Client`` is opened per call so one instance can be shared
    across threads.
    """

    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
    DEFAULT_MODEL = "gemini-2.5-flash"

    def __init__(
        self,
        api_key: str,
        *,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise GenerationError("Gemini API key not configured")
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def generate(
        self,
        prompt: str,
        *,
        web_search: bool = False,
        json_output: bool = False,
        temperature: float | None = None,
    ) -> str:
        payload: Dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        generation_config: Dict[str, Any] = {}
        # The API rejects a JSON response mime type when tools are attached.
        if json_output and not web_search:
            generation_config["responseMimeType"] = "application/json"
        if temperature is not None:
            generation_config["temperature"] = temperature
        if generation_config:
            payload["generationConfig"] = generation_config
        if web_search:
            payload["tools"] = [{"google_search": {}}]

        url = f"{self.base_url}/models/{self.model}:generateContent"
        try:
            with httpx.Client(transport=self._transport, timeout=self.timeout) as client:
                response = client.post(
                    url,
                    json=payload,
                    headers={"x-goog-api-key": self.api_key, "Content-Type": "application/json"},
                )
        except httpx.HTTPError as exc:
            raise GenerationError(f"Gemini request failed: {exc}") from exc

        if response.is_error:
            message = _error_message(response)
            if response.status_code == 429 or is_rate_limit_message(message):
                raise GenerationRateLimited(f"Gemini rate limit reached: {message}")
            raise GenerationError(f"Gemini API error ({response.status_code}): {message}")

        try:
            data = response.json()
        except ValueError as exc:
            raise GenerationError("Gemini returned a non-JSON body") from exc

        text = response_text(data)
        if not text:
            logger.warning("Gemini returned no text (finish reason: %s)", _finish_reason(data))
        return text


def response_text(data: Dict[str, Any]) -> str:
    """Concatenate the text parts of the first candidate."""

    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))


def _finish_reason(data: Dict[str, Any]) -> str:
    candidates = data.get("candidates") or []
    if candidates:
        return str(candidates[0].get("finishReason", "unknown"))
    feedback = data.get("promptFeedback") or {}
    return str(feedback.get("blockReason", "no candidates"))


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        pieces = [str(value) for value in (error.get("status"), error.get("message")) if value]
        return ": ".join(pieces) or response.reason_phrase
    return response.reason_phrase

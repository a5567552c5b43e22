"""Lenient extraction of a JSON value from free-form model output."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_FENCE_RE = re.compile(r"^```[\w-]*\s*\n?(.*?)\n?\s*```$", re.DOTALL)


def extract_json(text: str | None, fallback: T) -> Any | T:
    """Return the first JSON object/array found in ``text``, else ``fallback``.

    Markdown code fences are removed, then everything before the first
    ``{``/``[`` and after the last ``}``/``]`` is trimmed. Parse failures
    never raise.
    """

    if not text or not text.strip():
        return fallback

    payload = text.strip()
    fenced = _FENCE_RE.match(payload)
    if fenced:
        payload = fenced.group(1).strip()

    starts = [index for index in (payload.find("{"), payload.find("[")) if index != -1]
    if starts:
        start = min(starts)
        end = max(payload.rfind("}"), payload.rfind("]"))
        if end > start:
            payload = payload[start : end + 1]

    if not payload:
        return fallback

    try:
        return json.loads(payload)
    except ValueError as exc:
        logger.warning("Could not parse JSON from model output: %s", exc)
        logger.debug("Unparseable payload: %r", payload[:500])
        return fallback

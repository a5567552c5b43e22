"""Generative search fallback strategy."""

from __future__ import annotations

import logging
from typing import Any, List, Sequence
from urllib.parse import urlsplit

from ..config import EngineConfig, load_config
from ..jsonparse import extract_json
from ..llm import GenerativeClient
from ..prompts import EXTERNAL_LINK_INSTRUCTIONS, EXTERNAL_LINKING, PromptProfile, build_prompt, external_link_request
from ..text import collapse_whitespace
from ..types import RawSearchHit

logger = logging.getLogger(__name__)


class GenerativeSearchDiscovery:
    """Ask a web-search-enabled model for link candidates in one call."""

    def __init__(
        self,
        client: GenerativeClient,
        config: EngineConfig | None = None,
        profile: PromptProfile | None = None,
    ) -> None:
        self.client = client
        self.config = config or load_config(None)
        self.profile = profile

    def discover(self, topics: Sequence[str], content: str = "") -> List[RawSearchHit]:
        limit = self.config.get_int("generative_content_chars")
        excerpt = content if len(content) <= limit else content[:limit]
        prompt = build_prompt(
            EXTERNAL_LINK_INSTRUCTIONS,
            external_link_request(excerpt, list(topics)),
            self.profile,
            EXTERNAL_LINKING,
        )

        text = self.client.generate(
            prompt,
            web_search=True,
            temperature=self.config.get("generative_temperature"),
        )
        items = extract_json(text, [])
        if isinstance(items, dict):
            items = [items]
        if not isinstance(items, list):
            logger.warning("Generative search returned %s instead of a list", type(items).__name__)
            return []

        topic = topics[0] if topics else ""
        hits = [hit for hit in (_to_hit(item, topic) for item in items) if hit is not None]
        logger.debug("Generative search returned %d candidates", len(hits))
        return hits


def _to_hit(item: Any, topic: str) -> RawSearchHit | None:
    if not isinstance(item, dict):
        return None
    url = str(item.get("url") or "").strip()
    if not url:
        return None
    anchor = collapse_whitespace(str(item.get("anchorText") or item.get("anchor_text") or ""))
    context = collapse_whitespace(str(item.get("context") or ""))
    return RawSearchHit(
        title=str(item.get("title") or anchor),
        link=url,
        snippet=context,
        display_link=_hostname(url),
        topic=topic,
        proposed_anchor=anchor or None,
        proposed_context=context or None,
    )


def _hostname(url: str) -> str:
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""

"""Website context summaries and internal link selection."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence

from .config import EngineConfig, load_config
from .errors import GenerationError, GenerationRateLimited
from .jsonparse import extract_json
from .llm import GenerativeClient
from .prompts import (
    INTERNAL_LINK_INSTRUCTIONS,
    INTERNAL_LINKING,
    PromptProfile,
    build_prompt,
    internal_link_request,
    summary_prompt,
)
from .text import collapse_whitespace

logger = logging.getLogger(__name__)

SUMMARY_PLACEHOLDER = "Could not retrieve summary for this page."


def summarize_websites(
    urls: Sequence[str],
    client: GenerativeClient,
    config: EngineConfig | None = None,
) -> str:
    """Summarize each URL concurrently and join the results in input order.

    A failed URL gets a placeholder summary. A rate limit error cancels the
    remaining work and propagates.
    """

    targets = [url.strip() for url in urls if url and url.strip()]
    if not targets:
        return ""

    engine_config = config or load_config(None)
    workers = max(1, min(engine_config.get_int("summary_max_workers"), len(targets)))

    executor = ThreadPoolExecutor(max_workers=workers)
    try:
        futures = [executor.submit(_summarize_one, url, client) for url in targets]
        summaries: List[str] = []
        for url, future in zip(targets, futures):
            try:
                summary = future.result()
            except GenerationRateLimited:
                logger.warning("Rate limited while summarizing %s; aborting batch", url)
                executor.shutdown(wait=False, cancel_futures=True)
                raise
            except GenerationError as exc:
                logger.warning("Could not summarize %s: %s", url, exc)
                summary = SUMMARY_PLACEHOLDER
            if summary:
                summaries.append(f"URL: {url}\nSummary: {summary}")
    finally:
        executor.shutdown(wait=True)

    return "\n\n".join(summaries)


def _summarize_one(url: str, client: GenerativeClient) -> str:
    return collapse_whitespace(client.generate(summary_prompt(url), web_search=True))


def suggest_internal_links(
    content: str,
    client: GenerativeClient,
    profile: PromptProfile | None,
    config: EngineConfig | None = None,
) -> List[str]:
    """Pick internal link targets listed in the profile's website context."""

    website_context = profile.website_context if profile else ""
    if not website_context or not (content or "").strip():
        return []

    engine_config = config or load_config(None)
    limit = engine_config.get_int("internal_link_limit")
    prompt = build_prompt(
        INTERNAL_LINK_INSTRUCTIONS,
        internal_link_request(content, limit),
        profile,
        INTERNAL_LINKING,
    )
    text = client.generate(prompt, json_output=True)
    proposed = extract_json(text, [])
    if not isinstance(proposed, list):
        return []

    urls: List[str] = []
    for item in proposed:
        if not isinstance(item, str):
            continue
        url = item.strip()
        if url and url in website_context and url not in urls:
            urls.append(url)
        if len(urls) >= limit:
            break
    logger.info("Selected %d internal links", len(urls))
    return urls

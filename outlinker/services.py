"""Service functions bridging Django settings and the link engine.

Views call these helpers so that client construction, configuration
loading and the precedence between request-level and server-level search
credentials live in one place and can be patched in tests.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from django.conf import settings

from .engine.config import EngineConfig, load_config
from .engine.discovery.structured import GoogleSearchClient
from .engine.errors import GenerationError
from .engine.index import suggest_links
from .engine.llm import GeminiClient
from .engine.prompts import PromptProfile
from .engine.summaries import suggest_internal_links, summarize_websites
from .engine.types import LinkSuggestion, SearchConfig

logger = logging.getLogger(__name__)


def get_engine_config() -> EngineConfig:
    """Load engine tuning from ``OUTLINKER_ENGINE_CONFIG`` over the defaults."""

    return load_config(getattr(settings, 'OUTLINKER_ENGINE_CONFIG', None))


def get_search_client() -> GoogleSearchClient:
    return GoogleSearchClient(timeout=getattr(settings, 'OUTLINKER_HTTP_TIMEOUT', 15.0))


def get_generative_client() -> GeminiClient | None:
    """Return a Gemini client, or ``None`` when no API key is configured."""

    api_key = getattr(settings, 'GEMINI_API_KEY', '')
    if not api_key:
        return None
    return GeminiClient(
        api_key,
        model=getattr(settings, 'GEMINI_MODEL', None) or None,
        base_url=getattr(settings, 'GEMINI_BASE_URL', None) or None,
        timeout=getattr(settings, 'OUTLINKER_GENERATION_TIMEOUT', 60.0),
    )


def resolve_search_config(request_config: SearchConfig | None) -> SearchConfig | None:
    """Prefer a usable request-level config, else the server-level one.

    Parameters
    ----------
    request_config:
        Credentials supplied with the request, if any.

    Returns
    -------
    SearchConfig or None
        The configuration the structured search path should use.
    """

    if request_config is not None and request_config.is_configured:
        return request_config
    server_config = SearchConfig(
        api_key=getattr(settings, 'GOOGLE_SEARCH_API_KEY', ''),
        search_engine_id=getattr(settings, 'GOOGLE_SEARCH_ENGINE_ID', ''),
        is_enabled=getattr(settings, 'GOOGLE_SEARCH_ENABLED', False),
    )
    if server_config.is_configured:
        return server_config
    return request_config


def external_link_suggestions(
    content: str,
    keywords: Sequence[str],
    *,
    search_config: SearchConfig | None = None,
    profile: PromptProfile | None = None,
    max_suggestions: int | None = None,
) -> List[LinkSuggestion]:
    """Run the suggestion engine with clients built from settings."""

    return suggest_links(
        content,
        keywords,
        resolve_search_config(search_config),
        search_client=get_search_client(),
        generative_client=get_generative_client(),
        config=get_engine_config(),
        profile=profile,
        max_suggestions=max_suggestions,
    )


def internal_link_targets(content: str, profile: PromptProfile) -> List[str]:
    return suggest_internal_links(content, _require_generative_client(), profile, get_engine_config())


def website_context(urls: Sequence[str]) -> str:
    return summarize_websites(urls, _require_generative_client(), get_engine_config())


def _require_generative_client() -> GeminiClient:
    client = get_generative_client()
    if client is None:
        logger.error('GEMINI_API_KEY is not configured')
        raise GenerationError('Generative service is not configured')
    return client

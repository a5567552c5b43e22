"""Coordinator for the external link suggestion pipeline."""

from __future__ import annotations

import logging
from typing import List, Sequence
from urllib.parse import urlsplit

from . import anchors as anchors_module
from . import authority as authority_module
from . import matcher as matcher_module
from . import validation as validation_module
from .config import EngineConfig, load_config
from .discovery.generative import GenerativeSearchDiscovery
from .discovery.structured import GoogleSearchClient, StructuredSearchDiscovery
from .errors import FallbackInvocationFailure, GenerationError, ProviderQuotaExceeded
from .llm import GenerativeClient
from .prompts import PromptProfile
from .text import collapse_whitespace, split_sentences
from .topics import derive_topics, normalize_keywords
from .types import ContentMatch, DomainTier, LinkSuggestion, RawSearchHit, SearchConfig

logger = logging.getLogger(__name__)


class SuggestionAssembler:
    """Pick a discovery strategy, filter its hits and anchor them in the content.

    The structured provider is used when ``search_config`` is complete. Quota
    exhaustion there switches to the generative path, which is also the
    default. Only a failure of the generative call reaches the caller, as
    ``FallbackInvocationFailure``.
    """

    def __init__(
        self,
        search_client: GoogleSearchClient | None = None,
        generative_client: GenerativeClient | None = None,
        config: EngineConfig | None = None,
        profile: PromptProfile | None = None,
    ) -> None:
        self.search_client = search_client
        self.generative_client = generative_client
        self.config = config or load_config(None)
        self.profile = profile

    def suggest(
        self,
        content: str,
        keywords: Sequence[str] | None = None,
        search_config: SearchConfig | None = None,
        max_suggestions: int | None = None,
    ) -> List[LinkSuggestion]:
        cap = max_suggestions if max_suggestions is not None else self.config.get_int("max_suggestions")
        guidance = normalize_keywords(keywords)
        if not (content or "").strip() or cap <= 0:
            return []

        prepared = matcher_module.prepare_content(content, self.config)

        suggestions: List[LinkSuggestion] | None = None
        if self.search_client is not None and GoogleSearchClient.is_configured(search_config):
            suggestions = self._structured(content, guidance, search_config, prepared)
        if suggestions is None:
            suggestions = self._generative(content, guidance, prepared, cap)

        final = _dedupe(suggestions)[:cap]
        logger.info("Returning %d external link suggestions", len(final))
        return final

    def _structured(
        self,
        content: str,
        keywords: List[str],
        search_config: SearchConfig,
        prepared: matcher_module.PreparedContent,
    ) -> List[LinkSuggestion] | None:
        topics = derive_topics(content, keywords, self.config)
        logger.info("Using structured search for %d topics", len(topics))
        strategy = StructuredSearchDiscovery(self.search_client, search_config, self.config)
        try:
            hits = strategy.discover(topics, content)
        except ProviderQuotaExceeded:
            logger.warning("Structured search quota exhausted; falling back to generative search")
            return None
        return self._assemble(hits, prepared, generative=False, cap=self.config.get_int("structured_cap"))

    def _generative(
        self,
        content: str,
        keywords: List[str],
        prepared: matcher_module.PreparedContent,
        cap: int,
    ) -> List[LinkSuggestion]:
        if self.generative_client is None:
            raise FallbackInvocationFailure("Generative search is not configured")
        logger.info("Using generative search")
        strategy = GenerativeSearchDiscovery(self.generative_client, self.config, self.profile)
        try:
            hits = strategy.discover(keywords, content)
        except GenerationError as exc:
            raise FallbackInvocationFailure(f"Generative search failed: {exc}") from exc
        return self._assemble(hits, prepared, generative=True, cap=cap)

    def _assemble(
        self,
        hits: Sequence[RawSearchHit],
        prepared: matcher_module.PreparedContent,
        *,
        generative: bool,
        cap: int,
    ) -> List[LinkSuggestion]:
        suggestions: List[LinkSuggestion] = []
        seen_urls: set[str] = set()
        for hit in hits:
            if len(suggestions) >= cap:
                break
            if hit.link in seen_urls:
                continue
            reason = self._rejection_reason(hit, generative)
            if reason:
                logger.debug("Rejected %s: %s", hit.link, reason)
                continue
            suggestion = self._anchor(hit, prepared, generative)
            if suggestion is None:
                logger.debug("Rejected %s: no usable anchor", hit.link)
                continue
            seen_urls.add(hit.link)
            suggestions.append(suggestion)
        return suggestions

    def _rejection_reason(self, hit: RawSearchHit, generative: bool) -> str | None:
        result = validation_module.validate(hit.link)
        if not result.ok:
            return result.reason
        if _is_excluded(hit, self.config.get_list("exclude_domains")):
            return "excluded domain"
        if generative and authority_module.classify(hit.link, self.config) is DomainTier.LOW_QUALITY:
            return "low quality domain"
        return None

    def _anchor(
        self,
        hit: RawSearchHit,
        prepared: matcher_module.PreparedContent,
        generative: bool,
    ) -> LinkSuggestion | None:
        found = _verified_proposal(hit, prepared.plain_text) if generative else None
        if found is None:
            found = matcher_module.match_prepared(prepared, hit, hit.topic, self.config)

        if found is not None:
            anchor_text, context = found.anchor_text, found.context_sentence
        else:
            anchor_text = anchors_module.title_anchor(hit.title, self.config.get_int("max_anchor_length"))
            if not anchor_text:
                return None
            context = anchors_module.synthesize_context(anchor_text, hit.topic, hit.snippet)

        if anchor_text.lower() not in context.lower():
            return None
        return LinkSuggestion(
            url=hit.link,
            anchor_text=anchor_text,
            context=context,
            title=hit.title or None,
            domain=_domain(hit) or None,
            snippet=hit.snippet or None,
        )


def suggest_links(
    content: str,
    keywords: Sequence[str] | None = None,
    search_config: SearchConfig | None = None,
    *,
    search_client: GoogleSearchClient | None = None,
    generative_client: GenerativeClient | None = None,
    config: EngineConfig | None = None,
    profile: PromptProfile | None = None,
    max_suggestions: int | None = None,
) -> List[LinkSuggestion]:
    """Return up to ``max_suggestions`` external links anchored in ``content``."""

    assembler = SuggestionAssembler(
        search_client=search_client or GoogleSearchClient(),
        generative_client=generative_client,
        config=config,
        profile=profile,
    )
    return assembler.suggest(content, keywords, search_config, max_suggestions=max_suggestions)


def _verified_proposal(hit: RawSearchHit, plain_text: str) -> ContentMatch | None:
    """Accept a model-proposed anchor only when its context is a real sentence."""

    proposed_context = collapse_whitespace(hit.proposed_context or "")
    proposed_anchor = collapse_whitespace(hit.proposed_anchor or "")
    needle = proposed_context.rstrip(".!?")
    if not needle or not proposed_anchor:
        return None
    for sentence in split_sentences(plain_text):
        if needle not in sentence:
            continue
        start = sentence.lower().find(proposed_anchor.lower())
        if start < 0:
            return None
        anchor_text = sentence[start : start + len(proposed_anchor)]
        return ContentMatch(anchor_text=anchor_text, context_sentence=sentence, score=0)
    return None


def _is_excluded(hit: RawSearchHit, exclude_domains: Sequence[str]) -> bool:
    host = _domain(hit).lower()
    return any(entry.strip().lower() and entry.strip().lower() in host for entry in exclude_domains)


def _domain(hit: RawSearchHit) -> str:
    if hit.display_link:
        return hit.display_link
    try:
        return urlsplit(hit.link).hostname or ""
    except ValueError:
        return ""


def _dedupe(suggestions: Sequence[LinkSuggestion]) -> List[LinkSuggestion]:
    seen: set[str] = set()
    unique: List[LinkSuggestion] = []
    for suggestion in suggestions:
        if suggestion.url in seen:
            continue
        seen.add(suggestion.url)
        unique.append(suggestion)
    return unique

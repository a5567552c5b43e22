"""Structured search provider (Google Programmable Search) strategy."""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Any, Callable, Dict, List, Sequence

import httpx

from ..config import EngineConfig, load_config
from ..errors import ProviderError, ProviderNotConfigured, ProviderQuotaExceeded
from ..types import RawSearchHit, SearchConfig

logger = logging.getLogger(__name__)

QUOTA_MARKERS = ("quota", "ratelimitexceeded", "resource_exhausted", "dailylimitexceeded")


class GoogleSearchClient:
    """Thin client for the Custom Search JSON API."""

    ENDPOINT = "https://customsearch.googleapis.com/customsearch/v1"

    def __init__(
        self,
        *,
        timeout: float = 15.0,
        endpoint: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self.endpoint = endpoint or self.ENDPOINT
        self._transport = transport

    @staticmethod
    def is_configured(config: SearchConfig | None) -> bool:
        return bool(config and config.is_configured)

    def search(
        self,
        query: str,
        config: SearchConfig,
        *,
        num: int = 10,
        start: int = 1,
        site_search: str | None = None,
        date_restrict: str | None = None,
        file_type: str | None = None,
    ) -> List[RawSearchHit]:
        if not self.is_configured(config):
            raise ProviderNotConfigured("Structured search is not configured")

        params: Dict[str, Any] = {
            "key": config.api_key,
            "cx": config.search_engine_id,
            "q": query,
            "num": max(1, min(int(num), 10)),
            "start": max(1, int(start)),
        }
        if site_search:
            params["siteSearch"] = site_search
        if date_restrict:
            params["dateRestrict"] = date_restrict
        if file_type:
            params["fileType"] = file_type

        try:
            with httpx.Client(transport=self._transport, timeout=self.timeout) as client:
                response = client.get(self.endpoint, params=params)
        except httpx.HTTPError as exc:
            raise ProviderError(f"Search request failed: {exc.__class__.__name__}") from exc

        if response.status_code == 429 or (response.is_error and _is_quota_body(response.text)):
            raise ProviderQuotaExceeded("Search quota exhausted", status_code=response.status_code)
        if response.is_error:
            raise ProviderError(
                f"Search API error ({response.status_code})", status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError("Search API returned a non-JSON body") from exc

        hits: List[RawSearchHit] = []
        for item in data.get("items") or []:
            link = str(item.get("link") or "").strip()
            if not link:
                continue
            hits.append(
                RawSearchHit(
                    title=str(item.get("title") or ""),
                    link=link,
                    snippet=str(item.get("snippet") or ""),
                    display_link=str(item.get("displayLink") or ""),
                )
            )
        return hits


def _is_quota_body(body: str) -> bool:
    lowered = (body or "").lower()
    return any(marker in lowered for marker in QUOTA_MARKERS)


class StructuredSearchDiscovery:
    """Run query variants per topic, one request at a time."""

    def __init__(
        self,
        client: GoogleSearchClient,
        search_config: SearchConfig,
        config: EngineConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.client = client
        self.search_config = search_config
        self.config = config or load_config(None)
        self._sleep = sleep

    def discover(self, topics: Sequence[str], content: str = "") -> List[RawSearchHit]:
        """Return hits tagged with their topic.

        A failing query is skipped. ``ProviderQuotaExceeded`` propagates so the
        caller can switch strategies.
        """

        templates = self.config.get_list("query_templates") or ["{topic}"]
        request_delay = self.config.get_float("request_delay_seconds")
        topic_delay = self.config.get_float("topic_delay_seconds")

        hits: List[RawSearchHit] = []
        for topic_index, topic in enumerate(topics):
            if topic_index and topic_delay > 0:
                self._sleep(topic_delay)
            for query_index, template in enumerate(templates):
                if query_index and request_delay > 0:
                    self._sleep(request_delay)
                query = template.format(topic=topic).strip()
                hits.extend(self._run_query(query, topic))
        return hits

    def _run_query(self, query: str, topic: str) -> List[RawSearchHit]:
        try:
            results = self.client.search(
                query,
                self.search_config,
                num=self.config.get_int("results_per_query"),
                site_search=self.config.get("site_search"),
                date_restrict=self.config.get("date_restrict"),
                file_type=self.config.get("file_type"),
            )
        except ProviderQuotaExceeded:
            logger.warning("Structured search quota exhausted on query %r", query)
            raise
        except ProviderError as exc:
            logger.warning("Structured search query %r failed: %s", query, exc)
            return []

        logger.debug("Query %r returned %d hits", query, len(results))
        return [replace(hit, topic=topic) for hit in results]

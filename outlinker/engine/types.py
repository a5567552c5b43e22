"""Typed data structures used by the link discovery pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class DomainTier(str, Enum):
    """Reputation bucket assigned to a candidate hostname."""

    HIGH_AUTHORITY = "HighAuthority"
    NEUTRAL = "Neutral"
    LOW_QUALITY = "LowQuality"


@dataclass(frozen=True)
class SearchConfig:
    """Credentials for the structured search provider."""

    api_key: str = ""
    search_engine_id: str = ""
    is_enabled: bool = False

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.search_engine_id and self.is_enabled)

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "SearchConfig | None":
        if not data:
            return None
        return cls(
            api_key=str(data.get("apiKey") or data.get("api_key") or "").strip(),
            search_engine_id=str(data.get("searchEngineId") or data.get("search_engine_id") or "").strip(),
            is_enabled=_as_bool(data.get("isEnabled", data.get("is_enabled", False))),
        )

    def __repr__(self) -> str:  # pragma: no cover - masks the API key
        masked = "***" if self.api_key else ""
        return (
            f"SearchConfig(api_key={masked!r}, search_engine_id={self.search_engine_id!r}, "
            f"is_enabled={self.is_enabled!r})"
        )


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


@dataclass(frozen=True)
class RawSearchHit:
    """Strategy-agnostic search result.

    ``topic`` records the query seed that produced the hit. Generative hits
    may carry the anchor and context the model proposed; they are verified
    against the content before use.
    """

    title: str
    link: str
    snippet: str = ""
    display_link: str = ""
    topic: str = ""
    proposed_anchor: Optional[str] = None
    proposed_context: Optional[str] = None


@dataclass(frozen=True)
class ContentMatch:
    """Best (sentence, phrase) pair found in the content for one hit."""

    anchor_text: str
    context_sentence: str
    score: int


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class LinkSuggestion:
    """Public output unit: where and how to link to an external page."""

    url: str
    anchor_text: str
    context: str
    title: Optional[str] = None
    domain: Optional[str] = None
    snippet: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        payload = {"url": self.url, "anchorText": self.anchor_text, "context": self.context}
        if self.title is not None:
            payload["title"] = self.title
        if self.domain is not None:
            payload["domain"] = self.domain
        if self.snippet is not None:
            payload["snippet"] = self.snippet
        return payload

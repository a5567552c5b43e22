"""Configuration helpers for the link discovery engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml


@dataclass(frozen=True)
class EngineConfig:
    """Typed wrapper around the engine configuration dictionary."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    def get_int(self, key: str) -> int:
        return int(self.raw.get(key, DEFAULTS[key]))

    def get_float(self, key: str) -> float:
        return float(self.raw.get(key, DEFAULTS[key]))

    def get_list(self, key: str) -> List[str]:
        value = self.raw.get(key, DEFAULTS.get(key, []))
        if isinstance(value, str):
            return [value]
        return [str(item) for item in value or []]


DEFAULTS: Dict[str, Any] = {
    "max_suggestions": 5,
    "structured_cap": 8,
    "max_topics": 4,
    "topic_phrase_sentences": 3,
    "min_sentence_length": 30,
    "max_sentence_length": 300,
    "max_anchor_length": 60,
    "results_per_query": 5,
    "date_restrict": "y3",
    "site_search": None,
    "file_type": None,
    "request_delay_seconds": 0.25,
    "topic_delay_seconds": 0.2,
    "query_templates": ["{topic}", "{topic} research", "{topic} statistics"],
    "exclude_domains": [],
    "extra_authority_domains": [],
    "extra_low_quality_patterns": [],
    "generative_content_chars": 12000,
    "generative_temperature": None,
    "summary_max_workers": 4,
    "internal_link_limit": 4,
}


def load_config(path: str | Path | None = None) -> EngineConfig:
    """Load configuration from YAML, merging with defaults."""

    data: Dict[str, Any] = copy.deepcopy(DEFAULTS)

    if path is not None and Path(path).exists():
        with Path(path).open("r", encoding="utf-8") as stream:
            user = yaml.safe_load(stream) or {}
        merge_into(data, user)

    return EngineConfig(data)


def merge_into(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base dict."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_into(base[key], value)
        else:
            base[key] = value

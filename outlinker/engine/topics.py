"""Search topic derivation from guidance keywords and content."""

from __future__ import annotations

from typing import List, Sequence

from .config import EngineConfig, load_config
from .text import clean_word, collapse_whitespace, html_to_text, is_stopword, split_sentences

_MIN_PHRASE_CHARS = 9
_IMPORTANT_SENTENCE_MIN = 50
_IMPORTANT_SENTENCE_MAX = 200


def normalize_keywords(keywords: Sequence[str] | None) -> List[str]:
    """Strip, collapse and de-duplicate (case-insensitively) guidance keywords."""

    cleaned: List[str] = []
    seen = set()
    for keyword in keywords or []:
        value = collapse_whitespace(str(keyword))
        if not value or value.lower() in seen:
            continue
        seen.add(value.lower())
        cleaned.append(value)
    return cleaned


def derive_topics(content: str, keywords: Sequence[str] | None, config: EngineConfig | None = None) -> List[str]:
    """Return up to ``max_topics`` search seeds: keywords first, then content bigrams."""

    engine_config = config or load_config(None)
    limit = engine_config.get_int("max_topics")
    sentence_budget = engine_config.get_int("topic_phrase_sentences")

    topics = normalize_keywords(keywords)
    if len(topics) >= limit:
        return topics[:limit]

    sentences = [
        sentence
        for sentence in split_sentences(html_to_text(content))
        if _IMPORTANT_SENTENCE_MIN < len(sentence) < _IMPORTANT_SENTENCE_MAX
    ][:sentence_budget]

    for sentence in sentences:
        words = sentence.lower().split()
        for first, second in zip(words, words[1:]):
            first, second = clean_word(first), clean_word(second)
            if not first or not second or is_stopword(first) or is_stopword(second):
                continue
            phrase = f"{first} {second}"
            if len(phrase) < _MIN_PHRASE_CHARS:
                continue
            if any(phrase in topic.lower() for topic in topics):
                continue
            topics.append(phrase)
            if len(topics) >= limit:
                return topics
    return topics

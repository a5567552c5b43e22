"""Sentence scoring and anchor selection for one search hit."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from . import anchors as anchors_module
from .config import EngineConfig, load_config
from .text import STOPWORDS, clean_word, collapse_whitespace, html_to_text, is_list_like, split_sentences, tokenize
from .types import ContentMatch, RawSearchHit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sentence:
    text: str
    words: List[str]
    list_like: bool


@dataclass(frozen=True)
class PreparedContent:
    """Plain-text rendering of the content and its eligible sentences."""

    plain_text: str
    sentences: List[Sentence]


def prepare_content(content: str, config: EngineConfig | None = None) -> PreparedContent:
    """Normalize markup and keep sentences within the configured length bounds."""

    engine_config = config or load_config(None)
    minimum = engine_config.get_int("min_sentence_length")
    maximum = engine_config.get_int("max_sentence_length")

    plain_text = html_to_text(content)
    sentences = []
    for text in split_sentences(plain_text):
        if not minimum <= len(text) <= maximum:
            continue
        sentences.append(Sentence(text=text, words=text.split(" "), list_like=is_list_like(text)))
    return PreparedContent(plain_text=plain_text, sentences=sentences)


def build_keywords(hit: RawSearchHit, topic: str) -> List[str]:
    """Keyword set from the topic, title tokens (>3 chars) and snippet tokens (>4 chars)."""

    raw: List[str] = []
    topic_phrase = collapse_whitespace(topic or "").lower()
    if topic_phrase:
        raw.append(topic_phrase)
    raw.extend(token for token in tokenize(hit.title) if len(token) > 3)
    raw.extend(token for token in tokenize(hit.snippet) if len(token) > 4)

    keywords: List[str] = []
    for keyword in raw:
        if keyword in STOPWORDS or len(keyword) <= 2 or keyword in keywords:
            continue
        keywords.append(keyword)
    return keywords


def match(content: str, hit: RawSearchHit, topic: str, config: EngineConfig | None = None) -> ContentMatch | None:
    """Return the best (sentence, anchor) pair for the hit, or None."""

    return match_prepared(prepare_content(content, config), hit, topic, config)


def match_prepared(
    prepared: PreparedContent,
    hit: RawSearchHit,
    topic: str,
    config: EngineConfig | None = None,
) -> ContentMatch | None:
    keywords = build_keywords(hit, topic)
    if not keywords:
        return None

    max_anchor = (config or load_config(None)).get_int("max_anchor_length")

    best: ContentMatch | None = None
    for sentence in prepared.sentences:
        occurrences = find_occurrences(sentence.words, keywords)
        if not occurrences:
            continue
        matched = _distinct_keywords(occurrences)
        score = score_sentence(matched, sentence.list_like)

        candidates = anchors_module.window_candidates(sentence.words, occurrences)
        anchor = anchors_module.best_phrase(candidates, max_anchor)
        if not anchor:
            anchor = anchors_module.fallback_phrase(sentence.text, sentence.words, matched)
        if not anchor:
            continue

        if best is None or score > best.score:
            best = ContentMatch(anchor_text=anchor, context_sentence=sentence.text, score=score)

    if best is None:
        logger.debug("No sentence matched %s", hit.link)
    return best


def score_sentence(matched_keywords: Sequence[str], list_like: bool) -> int:
    """+3 per long keyword, +2 per short one, +2 at 4 or more, +1 for prose."""

    if not matched_keywords:
        return 0
    score = sum(3 if len(keyword) > 5 else 2 for keyword in matched_keywords)
    if score >= 4:
        score += 2
    if not list_like:
        score += 1
    return score


def find_occurrences(words: Sequence[str], keywords: Sequence[str]) -> List[anchors_module.Occurrence]:
    """Locate words containing each keyword; multi-word keywords span consecutive words."""

    normalized = [clean_word(word).lower() for word in words]
    occurrences: List[anchors_module.Occurrence] = []
    for keyword in keywords:
        parts = keyword.split()
        span = len(parts)
        for start in range(0, len(normalized) - span + 1):
            if all(part in normalized[start + offset] for offset, part in enumerate(parts)):
                occurrences.append(anchors_module.Occurrence(keyword=keyword, start=start, end=start + span - 1))
    return occurrences


def _distinct_keywords(occurrences: Sequence[anchors_module.Occurrence]) -> List[str]:
    seen: List[str] = []
    for occurrence in occurrences:
        if occurrence.keyword not in seen:
            seen.append(occurrence.keyword)
    return seen

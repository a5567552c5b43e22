"""Anchor phrase extraction and selection."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .text import EDGE_PUNCTUATION, collapse_whitespace, is_stopword

_NOUN_PHRASE_RE = re.compile(r"\b[A-Z][a-z]+(?:\s+[a-z]+){1,3}\b")
_SITE_PREFIX_RE = re.compile(r"^\w+\s+[-–—]\s+")
_SITE_SUFFIX_RE = re.compile(r"\s+[-–—]\s+\w+$")
_SEPARATOR_RE = re.compile(r"\s*[|•·]\s*")
_TRAILING_PUNCT_RE = re.compile(r"[,.;:!?]+$")

MIN_WINDOW_WORDS = 2
MAX_WINDOW_WORDS = 5
MIN_PHRASE_CHARS = 10
MAX_PHRASE_CHARS = 80


@dataclass(frozen=True)
class Occurrence:
    """A keyword found at word positions ``start``..``end`` (inclusive)."""

    keyword: str
    start: int
    end: int


@dataclass(frozen=True)
class PhraseCandidate:
    text: str
    keywords: int


def window_candidates(words: Sequence[str], occurrences: Sequence[Occurrence]) -> List[PhraseCandidate]:
    """Return 2-5 word windows around each keyword occurrence."""

    seen = set()
    candidates: List[PhraseCandidate] = []
    for occurrence in occurrences:
        for length in range(MIN_WINDOW_WORDS, MAX_WINDOW_WORDS + 1):
            first_start = max(0, occurrence.end - length + 1)
            last_start = min(occurrence.start, len(words) - length)
            for start in range(first_start, last_start + 1):
                end = start + length - 1
                if is_stopword(words[start]) or is_stopword(words[end]):
                    continue
                phrase = " ".join(words[start : end + 1]).strip(EDGE_PUNCTUATION)
                if not MIN_PHRASE_CHARS <= len(phrase) <= MAX_PHRASE_CHARS:
                    continue
                key = phrase.lower()
                if key in seen:
                    continue
                seen.add(key)
                covered = {
                    item.keyword for item in occurrences if item.start >= start and item.end <= end
                }
                candidates.append(PhraseCandidate(text=phrase, keywords=len(covered)))
    return candidates


def best_phrase(candidates: Sequence[PhraseCandidate], max_length: int = 60) -> str | None:
    """Pick the phrase covering most keywords, then the longest under ``max_length``."""

    if not candidates:
        return None

    def rank(candidate: PhraseCandidate) -> Tuple[int, bool, int]:
        length = len(candidate.text)
        fits = length < max_length
        return candidate.keywords, fits, length if fits else -length

    return max(candidates, key=rank).text


def fallback_phrase(sentence: str, words: Sequence[str], keywords: Sequence[str]) -> str | None:
    """Capitalized noun phrase, else the first 3-word window holding a keyword."""

    match = _NOUN_PHRASE_RE.search(sentence)
    if match:
        return match.group(0)

    for start in range(0, max(len(words) - 2, 0)):
        phrase = " ".join(words[start : start + 3])
        lowered = phrase.lower()
        if any(keyword in lowered for keyword in keywords):
            cleaned = _TRAILING_PUNCT_RE.sub("", phrase).strip()
            if cleaned:
                return cleaned
    return None


def title_anchor(title: str, max_length: int = 60) -> str:
    """Derive anchor text from a page title, dropping site-name framing."""

    cleaned = collapse_whitespace(title or "")
    anchor = _SEPARATOR_RE.sub(" - ", cleaned).strip(" -")
    anchor = _SITE_PREFIX_RE.sub("", anchor)
    anchor = _SITE_SUFFIX_RE.sub("", anchor).strip()

    if len(anchor) > max_length:
        first_sentence = re.split(r"[.!?]", anchor)[0].strip()
        anchor = first_sentence
        if len(anchor) > max_length:
            anchor = anchor[: max_length - 3].rstrip() + "..."

    return anchor or cleaned[:50].strip()


def synthesize_context(anchor: str, topic: str, snippet: str) -> str:
    """Build a generic host sentence that contains ``anchor`` verbatim."""

    excerpt = collapse_whitespace(snippet or "")
    if len(excerpt) > 100:
        excerpt = excerpt[:100].rstrip() + "..."
    subject = collapse_whitespace(topic or "").lower() or "this topic"
    sentence = f"For more on {subject}, see {anchor}."
    if excerpt:
        sentence = f"{sentence} {excerpt}"
    return sentence

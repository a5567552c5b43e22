"""Shared text utilities: markup normalization, sentences and tokens.

``html_to_text`` is the single place where markup becomes plain text. Every
context sentence the engine emits is a verbatim substring of its output, so
callers that want to locate a sentence must normalize with the same
function. Heading elements are removed together with their text. Malformed
or unbalanced markup is handled only as far as the parser recovers it.
"""

from __future__ import annotations

import re
from typing import FrozenSet, List

from bs4 import BeautifulSoup, FeatureNotFound  # type: ignore

_TOKEN_RE = re.compile(r"[\w']+")
_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]*")
_LIST_ITEM_RE = re.compile(r"^(?:[-•*]\s|\d+[.)]\s)")

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
NON_CONTENT_TAGS = ["script", "style", "noscript", "template"]
EDGE_PUNCTUATION = "\"'()[]{}<>,.;:!?“”‘’"

STOPWORDS: FrozenSet[str] = frozenset(
    {
        "the", "and", "for", "are", "but", "not", "you", "all", "can", "had",
        "her", "was", "one", "our", "out", "day", "get", "has", "him", "his",
        "how", "man", "new", "now", "old", "see", "two", "way", "who", "boy",
        "did", "its", "let", "put", "say", "she", "too", "use", "a", "an",
        "or", "to", "of", "in", "on", "with", "at", "by", "be", "is", "it",
        "as", "this", "that", "these", "those", "from", "your", "their",
        "they", "them", "then", "than", "what", "when", "which", "will",
        "would", "there", "were", "been", "have", "into", "also", "more",
        "about", "some", "such", "while", "where", "so", "during", "after",
        "before", "over", "under", "between", "through", "very", "most", "each",
        "other", "only", "many", "much", "just",
    }
)


def tokenize(text: str) -> List[str]:
    """Return lower-cased word tokens from the provided text."""

    return [token.lower() for token in _TOKEN_RE.findall(text)]


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def html_to_text(html: str) -> str:
    """Render markup as a single line of plain text without headings."""

    if not html or not html.strip():
        return ""

    try:
        soup = BeautifulSoup(html, "lxml")
    except FeatureNotFound:
        soup = BeautifulSoup(html, "html.parser")

    for node in soup.find_all(HEADING_TAGS + NON_CONTENT_TAGS):
        node.decompose()

    return collapse_whitespace(soup.get_text(" "))


def split_sentences(text: str) -> List[str]:
    """Split plain text on sentence terminators, keeping the terminator."""

    sentences = []
    for match in _SENTENCE_RE.finditer(text):
        sentence = match.group(0).strip()
        if sentence:
            sentences.append(sentence)
    return sentences


def is_list_like(sentence: str) -> bool:
    """Return True when the sentence starts with a bullet or ordinal marker."""

    return bool(_LIST_ITEM_RE.match(sentence.lstrip()))


def clean_word(word: str) -> str:
    """Strip surrounding punctuation from a whitespace-delimited word."""

    return word.strip(EDGE_PUNCTUATION)


def is_stopword(word: str) -> bool:
    return clean_word(word).lower() in STOPWORDS

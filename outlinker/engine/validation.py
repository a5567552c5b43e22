"""Structural URL checks for candidate links.

Validation is purely structural: a passing URL is plausible, never
confirmed live. No network request is made.
"""

from __future__ import annotations

import re
from typing import Tuple
from urllib.parse import urlparse

from .types import ValidationResult

_PLACEHOLDER_RES: Tuple[re.Pattern[str], ...] = (
    re.compile(r"\[[^\]]*\]"),
    re.compile(r"\{[^}]*\}"),
    re.compile(r"<[^>]*>"),
    re.compile(r"insert[_\- ]?(?:the[_\- ]?)?url", re.IGNORECASE),
    re.compile(r"replace[_\- ]?with[_\- ]?(?:the[_\- ]?)?url", re.IGNORECASE),
    re.compile(r"your[_\- ]?url[_\- ]?here", re.IGNORECASE),
    re.compile(r"^\s*url[_\- ]to[_\- ]", re.IGNORECASE),
)

_SYNTHETIC_HOST_RE = re.compile(
    r"(?:^|\.)(?:"
    r"example\.(?:com|org|net)"
    r"|your-?(?:website|domain|site)\.[a-z.]+"
    r"|placeholder\.[a-z.]+"
    r"|test\.com"
    r")$"
)
_LOCAL_HOSTS = {"localhost", "127.0.0.1", "0.0.0.0"}
_ALLOWED_SCHEMES = {"http", "https"}


def validate(url: str) -> ValidationResult:
    """Run placeholder, format and specificity checks in order."""

    if not url or not url.strip():
        return ValidationResult(False, "empty URL")

    candidate = url.strip()

    reason = _placeholder_reason(candidate)
    if reason:
        return ValidationResult(False, reason)

    reason = _format_reason(candidate)
    if reason:
        return ValidationResult(False, reason)

    if not is_specific(candidate):
        return ValidationResult(False, "URL appears to be a homepage or section root")

    return ValidationResult(True)


def is_specific(url: str) -> bool:
    """Return True when the path has at least two non-empty segments."""

    path = urlparse(url).path.rstrip("/")
    segments = [segment for segment in path.split("/") if segment]
    return len(segments) >= 2


def _placeholder_reason(url: str) -> str | None:
    for pattern in _PLACEHOLDER_RES:
        if pattern.search(url):
            return "placeholder URL"
    host = _hostname(url)
    if host in _LOCAL_HOSTS or _SYNTHETIC_HOST_RE.search(host):
        return "placeholder domain"
    return None


def _format_reason(url: str) -> str | None:
    if any(char.isspace() for char in url):
        return "URL contains whitespace"
    try:
        parsed = urlparse(url)
        # Accessing .port raises for malformed netlocs.
        parsed.port
    except ValueError:
        return "malformed URL"
    if parsed.scheme.lower() not in _ALLOWED_SCHEMES:
        return "unsupported scheme"
    host = parsed.hostname or ""
    if not host:
        return "missing hostname"
    if "." not in host:
        return "hostname has no dot"
    if host.endswith("."):
        return "hostname ends with a dot"
    return None


def _hostname(url: str) -> str:
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""

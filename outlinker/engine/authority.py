"""Hostname reputation tiers for candidate links."""

from __future__ import annotations

from typing import Iterable, Tuple
from urllib.parse import urlparse

from .config import EngineConfig
from .types import DomainTier

HIGH_AUTHORITY_DOMAINS: Tuple[str, ...] = (
    # Government and education suffixes
    ".gov",
    ".edu",
    ".mil",
    # News and finance
    "reuters.com",
    "bloomberg.com",
    "wsj.com",
    "forbes.com",
    "fortune.com",
    "cnn.com",
    "bbc.com",
    "bbc.co.uk",
    "nytimes.com",
    "washingtonpost.com",
    "economist.com",
    "marketwatch.com",
    # Research and academic
    "ncbi.nlm.nih.gov",
    "pubmed.ncbi.nlm.nih.gov",
    "scholar.google.com",
    "nature.com",
    "science.org",
    "cell.com",
    "sciencedirect.com",
    # International organizations
    "who.int",
    "worldbank.org",
    "un.org",
    "unesco.org",
    # Standards and technology
    "mozilla.org",
    "w3.org",
    "ietf.org",
    "techcrunch.com",
    "wired.com",
    "arstechnica.com",
    "zdnet.com",
    # Consulting
    "mckinsey.com",
    "bcg.com",
    "deloitte.com",
    "pwc.com",
    # Real estate
    "nar.realtor",
    "realtor.com",
    "zillow.com",
    "housingwire.com",
    "theclose.com",
    "homelight.com",
    "inman.com",
    "realtrends.com",
    # Home improvement
    "hgtv.com",
    "thisoldhouse.com",
    "bobvila.com",
    "familyhandyman.com",
    # Health
    "mayoclinic.org",
    "webmd.com",
    "healthline.com",
    "medicalnewstoday.com",
    # Personal finance
    "investopedia.com",
    "morningstar.com",
    "nerdwallet.com",
    "bankrate.com",
    "creditkarma.com",
    # Marketing
    "hubspot.com",
    "salesforce.com",
)

LOW_QUALITY_PATTERNS: Tuple[str, ...] = (
    "blogspot.com",
    "wordpress.com",
    "medium.com",
    "tumblr.com",
    "quora.com",
    "reddit.com",
    "facebook.com",
    "twitter.com",
    "x.com",
    "instagram.com",
    "tiktok.com",
    "pinterest.com",
    "linkedin.com/pulse",
    "youtube.com",
    "scam",
    "spam",
    "fake",
)


def classify(url: str, config: EngineConfig | None = None) -> DomainTier:
    """Return the reputation tier for the URL's hostname."""

    host, path = _split_host(url)
    if not host:
        return DomainTier.NEUTRAL

    extra_authority = config.get_list("extra_authority_domains") if config else []
    extra_low_quality = config.get_list("extra_low_quality_patterns") if config else []

    if _matches_domain(host, HIGH_AUTHORITY_DOMAINS) or _matches_domain(host, extra_authority):
        return DomainTier.HIGH_AUTHORITY

    location = f"{host}{path}"
    for pattern in (*LOW_QUALITY_PATTERNS, *extra_low_quality):
        if _matches_pattern(host, location, pattern.lower()):
            return DomainTier.LOW_QUALITY
    return DomainTier.NEUTRAL


def _split_host(url: str) -> Tuple[str, str]:
    candidate = (url or "").strip()
    if "://" not in candidate:
        candidate = f"//{candidate}"
    try:
        parsed = urlparse(candidate)
        host = (parsed.hostname or "").lower().rstrip(".")
    except ValueError:
        return "", ""
    return host, parsed.path.lower()


def _matches_domain(host: str, entries: Iterable[str]) -> bool:
    for entry in entries:
        entry = entry.lower().strip()
        if not entry:
            continue
        if entry.startswith("."):
            if host.endswith(entry):
                return True
        elif host == entry or host.endswith(f".{entry}"):
            return True
    return False


def _matches_pattern(host: str, location: str, pattern: str) -> bool:
    if not pattern:
        return False
    if "/" in pattern:
        return pattern in location
    if "." in pattern:
        return host == pattern or host.endswith(f".{pattern}")
    return pattern in host

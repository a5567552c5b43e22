"""Structural URL validation tests."""

from __future__ import annotations

import pytest

from outlinker.engine.validation import is_specific, validate


@pytest.mark.parametrize(
    "url",
    [
        "https://www.nar.realtor/research-and-statistics/housing-statistics",
        "http://www.census.gov/construction/nrs/index.html",
        "https://www.reuters.com/markets/us/home-sales-rise-2024-05-22/",
    ],
)
def test_specific_article_urls_pass(url):
    assert validate(url).ok


@pytest.mark.parametrize(
    "url, reason",
    [
        ("https://example.com/article/slug", "placeholder domain"),
        ("https://blog.example.org/posts/one", "placeholder domain"),
        ("https://your-website.com/blog/post", "placeholder domain"),
        ("http://localhost/blog/post", "placeholder domain"),
        ("https://[insert URL here]/a/b", "placeholder URL"),
        ("https://site.com/{slug}/page", "placeholder URL"),
        ("https://news.site.com/insert_url/here", "placeholder URL"),
    ],
)
def test_placeholders_are_rejected(url, reason):
    result = validate(url)

    assert not result.ok
    assert result.reason == reason


@pytest.mark.parametrize(
    "url",
    [
        "ftp://files.nasa.gov/data/set.csv",
        "https://intranet/reports/2024",
        "https://www.bls.gov/news release/cpi.htm",
        "not a url",
    ],
)
def test_malformed_urls_are_rejected(url):
    assert not validate(url).ok


def test_empty_url_is_rejected():
    assert validate("").reason == "empty URL"


def test_homepage_is_rejected_by_specificity():
    result = validate("https://realtor.com/")

    assert not result.ok
    assert "homepage" in result.reason


def test_single_segment_path_is_not_specific():
    assert not is_specific("https://www.zillow.com/research/")
    assert is_specific("https://www.zillow.com/research/home-values/")

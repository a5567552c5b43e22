"""Website context summarizer and internal link tests."""

from __future__ import annotations

import threading

import pytest

from outlinker.engine.errors import GenerationError, GenerationRateLimited
from outlinker.engine.prompts import PromptProfile
from outlinker.engine.summaries import SUMMARY_PLACEHOLDER, suggest_internal_links, summarize_websites

WEBSITE_CONTEXT = (
    "URL: https://shop.acme.io/guides/first-home\nSummary: A guide for first-time buyers.\n\n"
    "URL: https://shop.acme.io/tools/mortgage-calculator\nSummary: A mortgage calculator."
)


class UrlKeyedClient:
    """Answers per URL found in the prompt; thread safe."""

    def __init__(self, answers):
        self.answers = answers
        self.lock = threading.Lock()
        self.prompts = []

    def generate(self, prompt, *, web_search=False, json_output=False, temperature=None):
        with self.lock:
            self.prompts.append(prompt)
        for url, answer in self.answers.items():
            if url in prompt:
                if isinstance(answer, Exception):
                    raise answer
                return answer
        return ""


def test_summaries_keep_input_order_and_placeholder_failures():
    client = UrlKeyedClient(
        {
            "https://a.acme.io/one": "First page summary.",
            "https://a.acme.io/two": GenerationError("timeout"),
            "https://a.acme.io/three": "Third   page\nsummary.",
        }
    )

    context = summarize_websites(
        ["https://a.acme.io/one", "https://a.acme.io/two", "https://a.acme.io/three"], client
    )

    assert context == (
        "URL: https://a.acme.io/one\nSummary: First page summary.\n\n"
        f"URL: https://a.acme.io/two\nSummary: {SUMMARY_PLACEHOLDER}\n\n"
        "URL: https://a.acme.io/three\nSummary: Third page summary."
    )


def test_empty_summaries_are_omitted():
    client = UrlKeyedClient({"https://a.acme.io/one": "Only summary."})

    context = summarize_websites(["https://a.acme.io/one", "https://a.acme.io/blank"], client)

    assert context == "URL: https://a.acme.io/one\nSummary: Only summary."


def test_rate_limit_aborts_the_batch():
    client = UrlKeyedClient(
        {
            "https://a.acme.io/one": "Fine.",
            "https://a.acme.io/two": GenerationRateLimited("429"),
        }
    )

    with pytest.raises(GenerationRateLimited):
        summarize_websites(["https://a.acme.io/one", "https://a.acme.io/two", "https://a.acme.io/three"], client)


def test_no_urls_returns_empty_context():
    assert summarize_websites([" ", ""], UrlKeyedClient({})) == ""


def test_internal_links_are_restricted_to_website_context(fake_generative, engine_config):
    client = fake_generative(
        '```json\n["https://shop.acme.io/tools/mortgage-calculator", "https://elsewhere.com/a/b", '
        '"https://shop.acme.io/tools/mortgage-calculator", "https://shop.acme.io/guides/first-home", 7]\n```'
    )
    profile = PromptProfile(brand_voice="Warm.", website_context=WEBSITE_CONTEXT)

    urls = suggest_internal_links("A post about buying a first home.", client, profile, engine_config)

    assert urls == [
        "https://shop.acme.io/tools/mortgage-calculator",
        "https://shop.acme.io/guides/first-home",
    ]
    prompt = client.calls[0]["prompt"]
    assert "INTERNAL LINKING CONTEXT" in prompt
    assert "Warm." in prompt
    assert client.calls[0]["json_output"] is True


def test_internal_links_respect_limit(fake_generative, engine_config):
    engine_config.raw["internal_link_limit"] = 1
    client = fake_generative(
        '["https://shop.acme.io/guides/first-home", "https://shop.acme.io/tools/mortgage-calculator"]'
    )
    profile = PromptProfile(website_context=WEBSITE_CONTEXT)

    assert suggest_internal_links("Body.", client, profile, engine_config) == ["https://shop.acme.io/guides/first-home"]


def test_internal_links_need_website_context(fake_generative, engine_config):
    client = fake_generative('["https://shop.acme.io/guides/first-home"]')

    assert suggest_internal_links("Body.", client, PromptProfile(), engine_config) == []
    assert suggest_internal_links("Body.", client, None, engine_config) == []
    assert client.calls == []

"""Anchor extraction tests."""

from __future__ import annotations

from outlinker.engine import anchors


def _words(sentence):
    return sentence.split(" ")


def test_windows_skip_stopword_edges():
    words = _words("Prices in the city rose as home sales slowed.")
    occurrences = [anchors.Occurrence(keyword="home sales", start=6, end=7)]

    texts = [candidate.text for candidate in anchors.window_candidates(words, occurrences)]

    assert "home sales" in texts
    assert "home sales slowed" in texts
    assert all(not text.lower().startswith(("as ", "the ", "in ")) for text in texts)


def test_best_phrase_prefers_keyword_coverage_then_length():
    candidates = [
        anchors.PhraseCandidate(text="home sales", keywords=1),
        anchors.PhraseCandidate(text="increase in home sales", keywords=2),
        anchors.PhraseCandidate(text="5% increase in home sales", keywords=2),
    ]

    assert anchors.best_phrase(candidates) == "5% increase in home sales"
    assert anchors.best_phrase([]) is None


def test_best_phrase_prefers_phrases_under_the_limit():
    candidates = [
        anchors.PhraseCandidate(text="x" * 70, keywords=1),
        anchors.PhraseCandidate(text="short phrase", keywords=1),
    ]

    assert anchors.best_phrase(candidates, max_length=60) == "short phrase"


def test_fallback_phrase_uses_capitalized_noun_phrase():
    sentence = "Economists said Housing demand is cooling quickly."

    assert anchors.fallback_phrase(sentence, _words(sentence), ["demand"]) == "Economists said"


def test_fallback_phrase_uses_keyword_window():
    sentence = "rates at 7% hit demand hard."

    assert anchors.fallback_phrase(sentence, _words(sentence), ["demand"]) == "7% hit demand"


def test_title_anchor_strips_site_framing():
    assert anchors.title_anchor("Existing-Home Sales Rise 5% | NAR") == "Existing-Home Sales Rise 5%"
    assert anchors.title_anchor("Reuters - US home sales climb in May") == "US home sales climb in May"


def test_title_anchor_truncates_long_titles():
    title = "A very long headline about mortgage rates and housing inventory that keeps going on"

    anchor = anchors.title_anchor(title)

    assert len(anchor) == 60
    assert anchor.endswith("...")


def test_synthesized_context_contains_anchor():
    context = anchors.synthesize_context("Existing-Home Sales Report", "Home Sales", "x" * 150)

    assert "Existing-Home Sales Report" in context
    assert context.startswith("For more on home sales, see Existing-Home Sales Report.")
    assert context.endswith("...")

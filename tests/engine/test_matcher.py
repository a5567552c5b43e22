"""Sentence scoring and anchor matching tests."""

from __future__ import annotations

from outlinker.engine import matcher

REALTOR_SENTENCE = "The National Association of Realtors reports a 5% increase in home sales this quarter."


def test_match_finds_context_and_anchor(make_hit, engine_config):
    hit = make_hit(
        "https://www.nar.realtor/research/existing-home-sales",
        snippet="Data on home sales increase across regions.",
    )

    result = matcher.match(f"<p>{REALTOR_SENTENCE}</p>", hit, "home sales", engine_config)

    assert result is not None
    assert result.context_sentence == REALTOR_SENTENCE
    assert "home sales" in result.anchor_text
    assert result.anchor_text == "5% increase in home sales"


def test_anchor_is_substring_of_context(make_hit, engine_config):
    content = (
        "<p>Mortgage rates climbed to their highest level in two decades last month.</p>"
        "<p>Buyers responded by shifting toward smaller starter homes in the suburbs.</p>"
        "<ul><li>1. Inventory of starter homes remains historically tight today.</li></ul>"
    )
    hits = [
        make_hit("https://www.freddiemac.com/pmms/weekly-rates", title="Mortgage Rates Weekly Survey"),
        make_hit("https://www.census.gov/housing/starter", title="Starter Homes Inventory Report"),
    ]

    for hit in hits:
        result = matcher.match(content, hit, "", engine_config)
        assert result is not None
        assert result.anchor_text.lower() in result.context_sentence.lower()
        assert result.context_sentence in matcher.prepare_content(content, engine_config).plain_text


def test_no_keyword_overlap_returns_none(make_hit, engine_config):
    hit = make_hit("https://www.irs.gov/credits/energy", title="Energy Efficient Tax Credits")

    assert matcher.match(f"<p>{REALTOR_SENTENCE}</p>", hit, "tax credits", engine_config) is None


def test_sentences_outside_length_bounds_are_ignored(make_hit, engine_config):
    hit = make_hit("https://www.nar.realtor/research/sales", title="Home Sales")

    assert matcher.match("<p>Home sales rose.</p>", hit, "home sales", engine_config) is None


def test_sentences_over_maximum_length_are_ignored(make_hit, engine_config):
    long_sentence = "Home sales across the region kept climbing " * 8 + "through the year."
    short_sentence = "Home sales in the capital slowed during the winter months."
    hit = make_hit("https://www.nar.realtor/research/sales", title="Home Sales")

    assert len(long_sentence) > engine_config.get_int("max_sentence_length")
    assert matcher.match(f"<p>{long_sentence}</p>", hit, "home sales", engine_config) is None

    result = matcher.match(f"<p>{long_sentence}</p><p>{short_sentence}</p>", hit, "home sales", engine_config)

    assert result is not None
    assert result.context_sentence == short_sentence


def test_keyword_inside_hyphenated_word_matches(make_hit, engine_config):
    sentence = "Getting a mortgage pre-approval letter helps buyers compete in tight markets."
    hit = make_hit("https://www.consumerfinance.gov/owning-a-home/prepare", title="", snippet="")

    result = matcher.match(f"<p>{sentence}</p>", hit, "approval", engine_config)

    assert result is not None
    assert result.context_sentence == sentence
    assert "pre-approval" in result.anchor_text
    assert result.anchor_text in sentence


def test_find_occurrences_matches_inside_compound_words():
    words = "Many buyers now remortgage their real-estate holdings early.".split(" ")

    occurrences = matcher.find_occurrences(words, ["mortgage", "estate", "real estate"])

    assert [(item.keyword, item.start) for item in occurrences] == [("mortgage", 3), ("estate", 5)]


def test_earliest_sentence_wins_ties(make_hit, engine_config):
    content = (
        "<p>Regional home sales figures were published on Monday morning.</p>"
        "<p>National home sales figures were published on Friday evening.</p>"
    )
    hit = make_hit("https://www.nar.realtor/research/sales", title="Figures")

    result = matcher.match(content, hit, "home sales", engine_config)

    assert result is not None
    assert result.context_sentence.startswith("Regional")


def test_prose_beats_list_item_with_same_keywords(make_hit, engine_config):
    content = (
        "<p>- housing starts fell sharply across the northeast region.</p>"
        "<p>Analysts expect housing starts to recover later this year.</p>"
    )
    hit = make_hit("https://www.census.gov/construction/nrc/current", title="Starts")

    result = matcher.match(content, hit, "housing starts", engine_config)

    assert result is not None
    assert result.context_sentence.startswith("Analysts")


def test_score_sentence_weights():
    assert matcher.score_sentence([], False) == 0
    assert matcher.score_sentence(["tax"], True) == 2
    assert matcher.score_sentence(["tax"], False) == 3
    assert matcher.score_sentence(["home sales", "increase"], False) == 9
    assert matcher.score_sentence(["home sales", "increase"], True) == 8


def test_build_keywords_filters_noise(make_hit):
    hit = make_hit(
        "https://www.nar.realtor/research/sales",
        title="The Sales of Homes in 2024",
        snippet="Their latest report about sales",
    )

    keywords = matcher.build_keywords(hit, "Home  Sales")

    assert keywords[0] == "home sales"
    assert "the" not in keywords
    assert "their" not in keywords
    assert keywords.count("sales") == 1
    assert "homes" in keywords
    assert "latest" in keywords
    assert "2024" in keywords

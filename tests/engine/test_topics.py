"""Search topic derivation tests."""

from __future__ import annotations

from outlinker.engine.topics import derive_topics, normalize_keywords

CONTENT = (
    "<p>Mortgage rates climbed sharply during the spring buying season this year.</p>"
    "<p>Short line.</p>"
    "<p>First-time buyers faced rising closing costs in most metropolitan markets.</p>"
)


def test_normalize_keywords_dedupes_case_insensitively():
    assert normalize_keywords(["Home Sales", " home   sales ", "", "Mortgage Rates"]) == [
        "Home Sales",
        "Mortgage Rates",
    ]
    assert normalize_keywords(None) == []


def test_keywords_come_first(engine_config):
    topics = derive_topics(CONTENT, ["mortgage rates"], engine_config)

    assert topics[0] == "mortgage rates"
    assert len(topics) == 4
    assert "mortgage rates" not in topics[1:]


def test_bigrams_skip_stopwords_and_short_phrases(engine_config):
    topics = derive_topics(CONTENT, [], engine_config)

    assert topics == ["mortgage rates", "rates climbed", "climbed sharply", "spring buying"]


def test_topic_count_is_bounded(engine_config):
    engine_config.raw["max_topics"] = 2

    assert derive_topics(CONTENT, ["a", "b", "c"], engine_config) == ["a", "b"]

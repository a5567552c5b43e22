"""Engine configuration loading tests."""

from __future__ import annotations

from outlinker.engine.config import DEFAULTS, load_config


def test_defaults_without_file():
    config = load_config(None)

    assert config.get_int("max_suggestions") == 5
    assert config.get_int("structured_cap") == 8
    assert config.get_list("query_templates") == DEFAULTS["query_templates"]


def test_yaml_overrides_merge_with_defaults(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text("max_suggestions: 3\nexclude_domains:\n  - competitor.com\n", encoding="utf-8")

    config = load_config(path)

    assert config.get_int("max_suggestions") == 3
    assert config.get_list("exclude_domains") == ["competitor.com"]
    assert config.get_int("max_topics") == 4


def test_missing_file_uses_defaults(tmp_path):
    config = load_config(tmp_path / "missing.yaml")

    assert config.raw == DEFAULTS


def test_defaults_are_not_shared():
    config = load_config(None)
    config.raw["exclude_domains"].append("competitor.com")

    assert DEFAULTS["exclude_domains"] == []


def test_get_list_accepts_scalar():
    config = load_config(None)
    config.raw["exclude_domains"] = "competitor.com"

    assert config.get_list("exclude_domains") == ["competitor.com"]

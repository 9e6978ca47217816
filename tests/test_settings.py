""" Unit tests for configuration loading. """

import json

from word_discovery.settings import DEFAULT_CONFIG, load_config, resolve_path, sanitize_config


def test_missing_file_gives_defaults(tmp_path) -> None:
    assert load_config(str(tmp_path / "nope.json")) == DEFAULT_CONFIG
    assert load_config(None) == DEFAULT_CONFIG


def test_values_are_coerced_to_default_types(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "fade_duration_range_sec": [2, 4],
        "bg_color": [10, 20, 30],
        "grid_cols": 12.0,
        "hold_to_capture_seconds": 2,
        "debug_overlay": 1,
        "words_file": "mine.txt",
    }), encoding="utf-8")
    config = load_config(str(path))
    assert config["fade_duration_range_sec"] == (2.0, 4.0)
    assert config["bg_color"] == (10, 20, 30)
    assert config["grid_cols"] == 12 and isinstance(config["grid_cols"], int)
    assert config["hold_to_capture_seconds"] == 2.0
    assert config["debug_overlay"] is True
    assert config["words_file"] == "mine.txt"
    # Untouched keys keep their defaults.
    assert config["spotlight_radius_px"] == DEFAULT_CONFIG["spotlight_radius_px"]


def test_invalid_json_falls_back_to_defaults(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_config(str(path)) == DEFAULT_CONFIG


def test_sanitize_repairs_degenerate_values() -> None:
    config = dict(DEFAULT_CONFIG)
    config.update(
        fade_duration_range_sec=(7.0, 3.0),
        min_active_words=10,
        max_active_words=2,
        change_probability_per_cycle=1.5,
        max_sentence_words=-4,
    )
    sanitize_config(config)
    assert config["fade_duration_range_sec"] == (3.0, 7.0)
    assert config["max_active_words"] == 10
    assert config["change_probability_per_cycle"] == 1.0
    assert config["max_sentence_words"] == 0


def test_resolve_path(tmp_path) -> None:
    base = str(tmp_path)
    assert resolve_path("frames", base) == str(tmp_path / "frames")
    assert resolve_path(str(tmp_path / "abs"), "/elsewhere") == str(tmp_path / "abs")
    assert resolve_path(None, base) is None
    assert resolve_path("", base) == ""

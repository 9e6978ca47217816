"""Helpers for loading and sanitising the text discovery configuration."""
from __future__ import annotations

import copy
import json
import logging
import os
from typing import Any, Dict, Optional

LOG = logging.getLogger("text_discovery.settings")

# --------------------------- CONFIG ---------------------------
DEFAULT_CONFIG: Dict[str, Any] = {
    # Canvas / loop
    "width": 1280,
    "height": 800,
    "fps": 60,
    "max_frame_dt": 0.05,
    "seed": None,

    # Colors
    "bg_color": (255, 255, 255),
    "letter_color": (17, 17, 17),
    "highlight_color": (212, 17, 17),
    "outside_color": (0, 0, 0),
    "sentence_color": (235, 235, 235),

    # Spotlight
    "spotlight_radius_px": 140,
    "spotlight_feather_px": 40,

    # Grid
    "grid_cols": 24,
    "font_family": "monospace",
    "font_size_px": 20,
    "cell_padding_px": 8,

    # Letter behaviour
    "jitter_amplitude_px": 2.5,
    "jitter_speed_range": (0.6, 1.8),
    "fade_duration_range_sec": (3.0, 7.0),
    "change_probability_per_cycle": 0.5,

    # Words / capturing
    "hold_to_capture_seconds": 1.2,
    "min_word_length": 3,
    "max_word_length": 8,
    "seed_words_per_minute": 120.0,
    "min_active_words": 20,
    "max_active_words": 40,
    "detection_alpha_threshold": 0.25,
    "max_sentence_words": 50,
    "words_file": None,

    # Display / UX
    "debug_overlay": False,

    # Recording
    "save_frames_dir": "frames",
    "record_dir": "frames_out",
    "record_scale": 1.0,
    "video_codec": "libx264",
}
# --------------------------------------------------------------

_RANGE_KEYS = ("jitter_speed_range", "fade_duration_range_sec")


def _coerce_config_value(value, default):
    """Best-effort coercion of JSON-loaded values to match defaults."""

    if isinstance(default, tuple):
        if isinstance(value, (list, tuple)):
            return tuple(value)
        return default
    if isinstance(default, bool):
        return bool(value)
    if isinstance(default, int) and isinstance(value, (int, float)) and not isinstance(value, bool):
        return int(value)
    if isinstance(default, float) and isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(default, dict) and isinstance(value, dict):
        coerced = default.copy()
        for key, sub_value in value.items():
            if key in default:
                coerced[key] = _coerce_config_value(sub_value, default[key])
            else:
                coerced[key] = sub_value
        return coerced
    return value


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """Load a JSON config over the defaults. Missing files give the defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not path:
        return config
    try:
        with open(path, "r", encoding="utf-8") as f:
            user_config = json.load(f)
    except FileNotFoundError:
        LOG.debug("No config at %s; using defaults", path)
        return config
    except json.JSONDecodeError as exc:
        LOG.warning("Failed to parse config file %s: %s", path, exc)
        return config
    if not isinstance(user_config, dict):
        LOG.warning("Config file %s must contain a JSON object; ignoring it", path)
        return config
    for key, value in user_config.items():
        if key in config:
            config[key] = _coerce_config_value(value, config[key])
        else:
            LOG.warning("Unknown config key %r in %s", key, path)
            config[key] = value
    return sanitize_config(config)


def sanitize_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Repair degenerate values in place so the simulation can always run.

    Nothing here raises: swapped ranges are reordered, negative counts are
    clamped and an inverted population window collapses to its minimum.
    """
    for key in _RANGE_KEYS:
        lo, hi = config[key]
        if lo > hi:
            LOG.warning("%s has min > max (%s > %s); swapping", key, lo, hi)
            lo, hi = hi, lo
        config[key] = (max(0.0, float(lo)), max(0.0, float(hi)))
    if config["fade_duration_range_sec"][1] <= 0.0:
        LOG.warning("fade_duration_range_sec must be positive; using defaults")
        config["fade_duration_range_sec"] = DEFAULT_CONFIG["fade_duration_range_sec"]

    if config["min_word_length"] > config["max_word_length"]:
        LOG.warning(
            "min_word_length %s exceeds max_word_length %s; no word will ever be placed",
            config["min_word_length"], config["max_word_length"],
        )
    for key in ("min_active_words", "max_active_words", "max_sentence_words", "grid_cols"):
        if config[key] < 0:
            LOG.warning("%s cannot be negative; clamping to 0", key)
            config[key] = 0
    if config["max_active_words"] < config["min_active_words"]:
        LOG.warning("max_active_words below min_active_words; raising it to %s", config["min_active_words"])
        config["max_active_words"] = config["min_active_words"]

    prob = float(config["change_probability_per_cycle"])
    config["change_probability_per_cycle"] = min(1.0, max(0.0, prob))
    config["hold_to_capture_seconds"] = max(0.0, float(config["hold_to_capture_seconds"]))
    return config


def resolve_path(path_value: Optional[str], base_dir: str) -> Optional[str]:
    if path_value in (None, ""):
        return path_value
    path_str = str(path_value)
    if os.path.isabs(path_str):
        return path_str
    return os.path.abspath(os.path.join(base_dir, path_str))


__all__ = ["DEFAULT_CONFIG", "load_config", "resolve_path", "sanitize_config"]

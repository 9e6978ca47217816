"""Dictionary loading and word picking."""
from __future__ import annotations

import logging
import os
import random
from typing import Iterable, List, Optional, Sequence

from word_discovery.rng import pick

LOG = logging.getLogger("text_discovery.words")

ALPHABET = "abcdefghijklmnopqrstuvwxyz"

# A tiny built-in dictionary for seeding. Replace it with a words file.
DEFAULT_WORDS: List[str] = [
    "mind", "share", "thought", "word", "soup", "circle", "red", "light", "blur", "find",
    "idea", "dream", "story", "letter", "phase", "float", "jitter", "shift", "fade", "hold",
    "time", "space", "sense", "look", "seek", "play", "game", "craft", "build", "change",
]


def normalize_words(words: Iterable[str]) -> List[str]:
    """Lowercase, keep first occurrences only, drop anything outside the grid alphabet."""
    seen = set()
    out: List[str] = []
    for raw in words:
        word = str(raw).strip().lower()
        if not word or any(ch not in ALPHABET for ch in word):
            continue
        if word in seen:
            continue
        seen.add(word)
        out.append(word)
    return out


def load_words_from_file(path: Optional[str]) -> List[str]:
    if not path or not os.path.exists(path):
        return []
    words: List[str] = []
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        for line in f:
            toks = [t for t in line.strip().split() if t]
            words.extend(toks)
    cleaned = normalize_words(words)
    if len(cleaned) < len(words):
        LOG.info("words: kept %d of %d tokens from %s", len(cleaned), len(words), path)
    return cleaned


def words_in_bounds(words: Sequence[str], min_len: int, max_len: int) -> List[str]:
    return [w for w in words if min_len <= len(w) <= max_len]


def choose_word(rng: random.Random, words: Sequence[str], min_len: int, max_len: int) -> Optional[str]:
    """Random word with a length in [min_len, max_len], or None if nothing fits."""
    return pick(rng, words_in_bounds(words, min_len, max_len))

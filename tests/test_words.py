""" Unit tests for dictionary loading and word picking. """

import random

from word_discovery.words import choose_word, load_words_from_file, normalize_words, words_in_bounds


def test_normalize_words() -> None:
    assert normalize_words(["Cat", "cat", " dog ", "don't", "n3on", "", "bird"]) == ["cat", "dog", "bird"]


def test_load_words_from_file(tmp_path) -> None:
    path = tmp_path / "words.txt"
    path.write_text("Light dark\n\nlight  ember!\nmoon\n", encoding="utf-8")
    assert load_words_from_file(str(path)) == ["light", "dark", "moon"]
    assert load_words_from_file(str(tmp_path / "missing.txt")) == []
    assert load_words_from_file(None) == []


def test_choose_word_respects_length_bounds() -> None:
    words = ["ox", "cat", "bird", "elephant"]
    assert words_in_bounds(words, 3, 4) == ["cat", "bird"]
    rng = random.Random(3)
    for _ in range(50):
        assert choose_word(rng, words, 3, 4) in ("cat", "bird")
    assert choose_word(rng, words, 5, 7) is None
    assert choose_word(rng, [], 1, 10) is None

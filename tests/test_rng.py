""" Tests for the shared random stream and numeric helpers. """

import random

from word_discovery.rng import DEFAULT_SEED, clamp, lerp, make_rng, pick, rand_in_range


def test_empty_seed_uses_the_default() -> None:
    expected = random.Random(DEFAULT_SEED).random()
    assert make_rng(None).random() == expected
    assert make_rng("  ").random() == expected
    assert make_rng("other").random() != expected


def test_same_seed_same_stream() -> None:
    a, b = make_rng("abc"), make_rng("abc")
    assert [a.random() for _ in range(10)] == [b.random() for _ in range(10)]


def test_helpers() -> None:
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert lerp(0.1, 1.0, 0.0) == 0.1
    assert lerp(2.0, 4.0, 0.5) == 3.0
    rng = make_rng("range")
    for _ in range(50):
        assert 3.0 <= rand_in_range(rng, (3.0, 7.0)) <= 7.0


def test_pick() -> None:
    rng = make_rng("pick")
    assert pick(rng, []) is None
    items = ["a", "b", "c"]
    assert all(pick(rng, items) in items for _ in range(20))

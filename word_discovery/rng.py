"""Seeded randomness and the small numeric helpers shared by every system."""
from __future__ import annotations

import random
from typing import Optional, Sequence, Union

DEFAULT_SEED = "text-discovery"

Seed = Union[str, int, None]


def make_rng(seed: Seed = None) -> random.Random:
    """
    Return the single random stream a world shares between its systems.

    An empty seed falls back to DEFAULT_SEED, so two sessions started with the
    same settings and the same input timeline behave identically.
    """
    if seed is None or (isinstance(seed, str) and not seed.strip()):
        seed = DEFAULT_SEED
    return random.Random(seed)


def clamp(x, a, b):
    return max(a, min(b, x))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def rand_between(rng: random.Random, a: float, b: float) -> float:
    return a + (b - a) * rng.random()


def rand_in_range(rng: random.Random, bounds: Sequence[float]) -> float:
    lo, hi = bounds
    return rand_between(rng, lo, hi)


def pick(rng: random.Random, items: Sequence) -> Optional[object]:
    """Uniform choice that tolerates an empty sequence."""
    if not items:
        return None
    return items[int(rng.random() * len(items))]

"""One text discovery session: owns every system and runs them in frame order."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from word_discovery.capture import CaptureMachine, Sentence
from word_discovery.grid import GridLayout, LetterGrid
from word_discovery.rng import Seed, make_rng
from word_discovery.seeder import WordSeeder
from word_discovery.spotlight import ScanResult, SpotlightCandidate, scan_spotlight
from word_discovery.trie import PrefixTree
from word_discovery.words import DEFAULT_WORDS, normalize_words

LOG = logging.getLogger("text_discovery.world")


@dataclass
class Pointer:
    """Latest pointer sample in surface coordinates."""

    x: float = 0.0
    y: float = 0.0
    down: bool = False


@dataclass
class DebugStats:
    include_count: int = 0
    num_candidates: int = 0
    num_filtered: int = 0
    last_candidate: Optional[SpotlightCandidate] = None


@dataclass
class DiscoveryWorld:
    """
    The host owns the loop and calls tick(dt, pointer) once per frame.

    Within a frame the order is fixed: letter fades and mutation, then word
    seeding and eviction, then the spotlight scan and the capture update. The
    shared random stream is drawn from in that same order.
    """

    config: Dict[str, Any]
    words: Sequence[str] = field(default_factory=lambda: list(DEFAULT_WORDS))
    layout: Optional[GridLayout] = None
    seed: Seed = None

    def __post_init__(self) -> None:
        self.words = normalize_words(self.words)
        if not self.words:
            LOG.warning("Dictionary is empty; nothing will be seeded or captured")
        if self.layout is None:
            self.layout = GridLayout.from_config(self.config)
        if self.seed is None:
            self.seed = self.config.get("seed")
        self.rng = make_rng(self.seed)
        self.trie = PrefixTree(self.words)
        self.sentence = Sentence(self.config["max_sentence_words"])
        self.now = 0.0
        self.frame = 0
        self.scan = ScanResult()
        self.debug = DebugStats()
        self._build_systems()
        LOG.info(
            "World ready: %dx%d grid, %d words, seed=%r",
            self.layout.rows, self.layout.cols, len(self.words), self.seed,
        )

    def _build_systems(self) -> None:
        self.grid = LetterGrid(self.layout, self.rng, self.config, now=self.now)
        self.seeder = WordSeeder(self.grid, self.words, self.config)
        self.capture = CaptureMachine(
            self.grid, self.seeder, self.sentence, self.config["hold_to_capture_seconds"]
        )

    def reset(self) -> None:
        """Fresh letters and placements; the sentence is kept."""
        self._build_systems()
        self.scan = ScanResult()
        self.debug = DebugStats()

    # ------------------------------------------------------------------
    def tick(self, dt: float, pointer: Pointer) -> Optional[str]:
        dt = max(0.0, float(dt))
        self.now += dt
        self.frame += 1

        self.grid.update(dt, self.now)
        self.seeder.update(dt)
        self.scan = scan_spotlight(
            self.grid,
            self.trie,
            pointer.x,
            pointer.y,
            self.config["spotlight_radius_px"],
            self.config["detection_alpha_threshold"],
            self.config["min_word_length"],
            self.config["max_word_length"],
            self.rng,
        )
        self._record_debug()
        return self.capture.update(self.now, pointer.down, self.scan)

    def _record_debug(self) -> None:
        self.debug.include_count = self.scan.include_count
        self.debug.num_candidates = self.scan.raw_count
        self.debug.num_filtered = len(self.scan.candidates)
        if self.scan.chosen is not None:
            self.debug.last_candidate = self.scan.chosen

    @property
    def placed_words(self):
        return self.seeder.placed

"""Keeps a population of dictionary words hidden in the letter grid."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from word_discovery.grid import Cell, LetterGrid
from word_discovery.rng import clamp
from word_discovery.words import choose_word

LOG = logging.getLogger("text_discovery.seeder")

PLACEMENT_ATTEMPTS = 40
MIN_FILL_ATTEMPTS = 20
MAX_SEED_PROBABILITY = 0.75


class Orientation(Enum):
    HORIZONTAL = "H"
    VERTICAL = "V"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Orientation.HORIZONTAL else (1, 0)


def run_key(word: str, cells: Sequence[Cell]) -> str:
    """Identity of a word on the grid: its text plus the exact cell indices."""
    return f"{word}:{'-'.join(str(cell.index) for cell in cells)}"


@dataclass(eq=False)
class PlacedWord:
    """One placed word with the cells it owns, in reading order."""

    word: str
    row: int
    col: int
    orientation: Orientation
    cells: List[Cell] = field(default_factory=list)

    @property
    def key(self) -> str:
        return run_key(self.word, self.cells)

    @property
    def indices(self) -> List[int]:
        return [cell.index for cell in self.cells]


class WordSeeder:
    """Places, evicts and forgets words; the oldest placement is evicted first."""

    def __init__(self, grid: LetterGrid, words: Sequence[str], config: Dict[str, Any]):
        self.grid = grid
        self.rng = grid.rng
        self.words = list(words)
        self.min_len = int(config["min_word_length"])
        self.max_len = int(config["max_word_length"])
        self.min_active = int(config["min_active_words"])
        self.max_active = int(config["max_active_words"])
        self.words_per_minute = float(config["seed_words_per_minute"])
        self.placed: List[PlacedWord] = []

    def __len__(self) -> int:
        return len(self.placed)

    # ------------------------------------------------------------------
    def update(self, dt: float) -> None:
        while len(self.placed) > self.max_active:
            self.evict_oldest()

        guard = 0
        while len(self.placed) < self.min_active and guard < MIN_FILL_ATTEMPTS:
            guard += 1
            if self.try_place() is None:
                break

        p = clamp(self.words_per_minute / 60.0 * dt, 0.0, MAX_SEED_PROBABILITY)
        if len(self.placed) < self.max_active and self.rng.random() < p:
            self.try_place()

    def try_place(self) -> Optional[PlacedWord]:
        word = choose_word(self.rng, self.words, self.min_len, self.max_len)
        if word is None:
            LOG.debug("place: no dictionary word within %d..%d letters", self.min_len, self.max_len)
            return None
        length = len(word)
        rows, cols = self.grid.rows, self.grid.cols
        for _ in range(PLACEMENT_ATTEMPTS):
            if self.rng.random() < 0.5:
                orientation = Orientation.HORIZONTAL
                max_start = cols - length
                if max_start < 0:
                    LOG.debug("place: '%s' cannot fit a %d-column grid", word, cols)
                    return None
                row = int(self.rng.random() * rows)
                col = int(self.rng.random() * (max_start + 1))
            else:
                orientation = Orientation.VERTICAL
                max_start = rows - length
                if max_start < 0:
                    LOG.debug("place: '%s' cannot fit a %d-row grid", word, rows)
                    return None
                col = int(self.rng.random() * cols)
                row = int(self.rng.random() * (max_start + 1))
            placed = self.place(word, row, col, orientation)
            if placed is not None:
                return placed
        LOG.debug("place: gave up on '%s' after %d attempts", word, PLACEMENT_ATTEMPTS)
        return None

    def run_cells(self, row: int, col: int, length: int, orientation: Orientation) -> Optional[List[Cell]]:
        """Cells of a straight run, or None when it leaves the grid or touches a lock."""
        dr, dc = orientation.step
        cells: List[Cell] = []
        for i in range(length):
            r, c = row + dr * i, col + dc * i
            if not self.grid.in_bounds(r, c):
                return None
            cell = self.grid.cell(r, c)
            if cell.locked:
                return None
            cells.append(cell)
        return cells

    def place(self, word: str, row: int, col: int, orientation: Orientation) -> Optional[PlacedWord]:
        cells = self.run_cells(row, col, len(word), orientation)
        if cells is None:
            return None
        for cell, ch in zip(cells, word):
            cell.locked = True
            self.grid.stage(cell, ch)
        placed = PlacedWord(word=word, row=row, col=col, orientation=orientation, cells=cells)
        self.placed.append(placed)
        LOG.debug("place: '%s' at (%d, %d) %s", word, row, col, orientation.value)
        return placed

    # ------------------------------------------------------------------
    def remove(self, placed: PlacedWord) -> None:
        """Forget a placed word and unlock its cells; their letters stay until they mutate."""
        try:
            self.placed.remove(placed)
        except ValueError:
            return
        for cell in placed.cells:
            cell.locked = False

    def evict_oldest(self) -> Optional[PlacedWord]:
        if not self.placed:
            return None
        oldest = self.placed[0]
        self.remove(oldest)
        LOG.debug("evict: '%s'", oldest.word)
        return oldest

    def words_touching(self, indices: Iterable[int]) -> List[PlacedWord]:
        wanted = set(indices)
        return [pw for pw in self.placed if wanted.intersection(pw.indices)]

    def clear(self) -> None:
        while self.placed:
            self.evict_oldest()

"""Letter grid model: cell layout, fade lifecycle and spontaneous mutation."""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from word_discovery.rng import clamp, lerp, rand_in_range
from word_discovery.words import ALPHABET


class FadeState(Enum):
    STEADY = "steady"
    FADING_OUT = "fading-out"
    FADING_IN = "fading-in"


@dataclass
class GridLayout:
    """Pixel geometry of the grid inside a drawing surface."""

    rows: int
    cols: int
    cell_w: int
    cell_h: int
    origin_x: int = 0
    origin_y: int = 0

    @classmethod
    def fit(
        cls,
        width: int,
        height: int,
        cols: int,
        font_size: int,
        padding: int,
        rows: Optional[int] = None,
    ) -> "GridLayout":
        """Size cells from the font, derive rows from the height and centre the grid."""
        cell_w = max(8, int(font_size + padding))
        cell_h = max(8, int(math.floor(font_size * 1.6)))
        if rows is None:
            rows = max(4, int(height // cell_h))
        grid_w = cols * cell_w
        grid_h = rows * cell_h
        return cls(
            rows=rows,
            cols=cols,
            cell_w=cell_w,
            cell_h=cell_h,
            origin_x=int((width - grid_w) // 2),
            origin_y=int((height - grid_h) // 2),
        )

    @classmethod
    def from_config(cls, config: Dict[str, Any], rows: Optional[int] = None) -> "GridLayout":
        return cls.fit(
            config["width"],
            config["height"],
            config["grid_cols"],
            config["font_size_px"],
            config["cell_padding_px"],
            rows=rows,
        )

    def anchor(self, row: int, col: int) -> Tuple[float, float]:
        x = self.origin_x + col * self.cell_w + math.floor(self.cell_w * 0.5)
        y = self.origin_y + row * self.cell_h + math.floor(self.cell_h * 0.7)
        return float(x), float(y)


@dataclass(eq=False)
class Cell:
    """
    One grid position.

    x/y is the stable anchor used for spotlight containment; jitter only
    moves the drawn glyph. staged_char is only meaningful while the cell is
    FADING_OUT and is applied when the fade reaches zero.
    """

    row: int
    col: int
    index: int
    x: float
    y: float
    char: str
    phase: float = 0.0
    speed: float = 1.0
    jitter_seed: float = 0.0
    fade: float = 1.0
    state: FadeState = FadeState.STEADY
    staged_char: Optional[str] = None
    fade_duration: float = 1.0
    next_at: float = 0.0
    locked: bool = False

    @property
    def visible(self) -> bool:
        return self.fade > 0.0


class LetterGrid:
    """Fixed rows x cols of mutating letters."""

    def __init__(self, layout: GridLayout, rng: random.Random, config: Dict[str, Any], now: float = 0.0):
        self.layout = layout
        self.rows = layout.rows
        self.cols = layout.cols
        self.rng = rng
        self.fade_range = tuple(config["fade_duration_range_sec"])
        self.change_probability = float(config["change_probability_per_cycle"])
        speed_lo, speed_hi = config["jitter_speed_range"]

        self.cells: List[Cell] = []
        for r in range(self.rows):
            for c in range(self.cols):
                x, y = layout.anchor(r, c)
                self.cells.append(Cell(
                    row=r,
                    col=c,
                    index=r * self.cols + c,
                    x=x,
                    y=y,
                    char=self.random_char(),
                    phase=rng.random() * math.pi * 2,
                    speed=lerp(speed_lo, speed_hi, rng.random()),
                    jitter_seed=rng.random() * 1000,
                    next_at=now + self._cycle_seconds(),
                ))
        self.anchor_x = np.array([cell.x for cell in self.cells], dtype=float)
        self.anchor_y = np.array([cell.y for cell in self.cells], dtype=float)

    # ------------------------------------------------------------------
    def random_char(self) -> str:
        return ALPHABET[int(self.rng.random() * len(ALPHABET))]

    def _cycle_seconds(self) -> float:
        return rand_in_range(self.rng, self.fade_range)

    def index(self, row: int, col: int) -> int:
        return row * self.cols + col

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[self.index(row, col)]

    def fade_array(self) -> np.ndarray:
        return np.fromiter((cell.fade for cell in self.cells), dtype=float, count=len(self.cells))

    def text_rows(self) -> List[str]:
        return ["".join(self.cells[self.index(r, c)].char for c in range(self.cols)) for r in range(self.rows)]

    # ------------------------------------------------------------------
    def _begin_fade_out(self, cell: Cell) -> None:
        if cell.state is not FadeState.FADING_OUT:
            cell.state = FadeState.FADING_OUT
            cell.fade_duration = self._cycle_seconds()

    def stage(self, cell: Cell, ch: str) -> None:
        """Swap in ch at the next moment the cell is invisible."""
        cell.staged_char = ch
        self._begin_fade_out(cell)

    def release(self, cell: Cell) -> None:
        """Unlock the cell and let it fade out to a random letter."""
        cell.locked = False
        cell.staged_char = None
        self._begin_fade_out(cell)

    def update(self, dt: float, now: float) -> None:
        for cell in self.cells:
            if cell.state is not FadeState.STEADY:
                self._advance_fade(cell, dt, now)
            elif not cell.locked and now >= cell.next_at:
                if self.rng.random() < self.change_probability:
                    self._begin_fade_out(cell)
                else:
                    cell.next_at = now + self._cycle_seconds()
            cell.phase += cell.speed * dt

    def _advance_fade(self, cell: Cell, dt: float, now: float) -> None:
        direction = -1.0 if cell.state is FadeState.FADING_OUT else 1.0
        if cell.fade_duration > 0.0:
            cell.fade = clamp(cell.fade + direction * dt / cell.fade_duration, 0.0, 1.0)
        else:
            cell.fade = 0.0 if direction < 0 else 1.0

        if cell.state is FadeState.FADING_OUT and cell.fade <= 0.0:
            cell.char = cell.staged_char if cell.staged_char is not None else self.random_char()
            cell.staged_char = None
            cell.state = FadeState.FADING_IN
            cell.fade_duration = self._cycle_seconds()
        elif cell.state is FadeState.FADING_IN and cell.fade >= 1.0:
            cell.state = FadeState.STEADY
            cell.next_at = now + self._cycle_seconds()


def jitter_offset(cell: Cell, amplitude: float) -> Tuple[float, float]:
    """Cosmetic glyph offset; never used for matching."""
    dx = math.cos(cell.phase + cell.jitter_seed) * amplitude
    dy = math.sin(cell.phase * 0.8 + cell.jitter_seed) * amplitude
    return dx, dy

"""Finds dictionary words among the readable letters under the spotlight."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from word_discovery.grid import Cell, LetterGrid
from word_discovery.seeder import Orientation, run_key
from word_discovery.trie import PrefixTree


@dataclass(eq=False)
class SpotlightCandidate:
    """A word-shaped run of visible, in-spotlight cells recognised by the tree."""

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


@dataclass
class ScanResult:
    chosen: Optional[SpotlightCandidate] = None
    candidates: List[SpotlightCandidate] = field(default_factory=list)
    raw_count: int = 0
    include_count: int = 0

    def keys(self) -> set:
        return {c.key for c in self.candidates}


def inclusion_mask(grid: LetterGrid, x: float, y: float, radius: float, threshold: float) -> np.ndarray:
    """True for cells whose anchor is inside the circle and whose letter is readable."""
    dx = grid.anchor_x - x
    dy = grid.anchor_y - y
    inside = dx * dx + dy * dy <= radius * radius
    return inside & (grid.fade_array() >= threshold)


def scan_segment(tree: PrefixTree, seg: Sequence[Cell], orientation: Orientation, out: List[SpotlightCandidate]) -> None:
    """Record every dictionary word starting at every offset of a contiguous run."""
    for i in range(len(seg)):
        node = tree.root
        for j in range(i, len(seg)):
            node = tree.step(node, seg[j].char)
            if node is None:
                break
            if node.terminal:
                cells = list(seg[i:j + 1])
                word = "".join(cell.char for cell in cells)
                out.append(SpotlightCandidate(word, cells[0].row, cells[0].col, orientation, cells))


def _scan_lines(grid: LetterGrid, include: np.ndarray, tree: PrefixTree,
                orientation: Orientation, out: List[SpotlightCandidate]) -> None:
    if orientation is Orientation.HORIZONTAL:
        lines = [[grid.index(r, c) for c in range(grid.cols)] for r in range(grid.rows)]
    else:
        lines = [[grid.index(r, c) for r in range(grid.rows)] for c in range(grid.cols)]
    for line in lines:
        seg: List[Cell] = []
        for idx in line:
            if include[idx]:
                seg.append(grid.cells[idx])
                continue
            if seg:
                scan_segment(tree, seg, orientation, out)
                seg = []
        if seg:
            scan_segment(tree, seg, orientation, out)


def scan_spotlight(
    grid: LetterGrid,
    tree: PrefixTree,
    x: float,
    y: float,
    radius: float,
    threshold: float,
    min_len: int,
    max_len: int,
    rng: random.Random,
) -> ScanResult:
    """
    Recompute the spotlight candidates from scratch.

    Rows are scanned left to right and columns top to bottom, since the seeder
    places words in both orientations. The longest candidate wins; equal
    lengths are broken with one draw from the shared stream.
    """
    include = inclusion_mask(grid, x, y, radius, threshold)
    found: List[SpotlightCandidate] = []
    if include.any():
        _scan_lines(grid, include, tree, Orientation.HORIZONTAL, found)
        _scan_lines(grid, include, tree, Orientation.VERTICAL, found)

    filtered = [c for c in found if min_len <= len(c.word) <= max_len]
    result = ScanResult(candidates=filtered, raw_count=len(found), include_count=int(include.sum()))
    if not filtered:
        return result
    longest = max(len(c.word) for c in filtered)
    ties = [c for c in filtered if len(c.word) == longest]
    result.chosen = ties[int(rng.random() * len(ties))]
    return result

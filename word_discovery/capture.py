"""Hold-to-capture state machine and the sentence it feeds."""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Iterator, List, Optional

from word_discovery.grid import LetterGrid
from word_discovery.rng import clamp
from word_discovery.seeder import WordSeeder
from word_discovery.spotlight import ScanResult, SpotlightCandidate

LOG = logging.getLogger("text_discovery.capture")


class Sentence:
    """Captured words in capture order; the oldest drops out past max_words."""

    def __init__(self, max_words: int) -> None:
        self.max_words = max(0, int(max_words))
        self._words: Deque[str] = deque()

    def append(self, word: str) -> None:
        self._words.append(word)
        while len(self._words) > self.max_words:
            self._words.popleft()

    def clear(self) -> None:
        self._words.clear()

    @property
    def words(self) -> List[str]:
        return list(self._words)

    @property
    def text(self) -> str:
        return " ".join(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)


class CaptureState(Enum):
    IDLE = "idle"
    HOLDING = "holding"
    COMMITTING = "committing"


@dataclass
class CaptureSession:
    """The candidate frozen when the hold began."""

    candidate: SpotlightCandidate
    key: str
    start: float
    progress: float = 0.0


class CaptureMachine:
    def __init__(self, grid: LetterGrid, seeder: WordSeeder, sentence: Sentence, hold_seconds: float):
        self.grid = grid
        self.seeder = seeder
        self.sentence = sentence
        self.hold_seconds = float(hold_seconds)
        self.state = CaptureState.IDLE
        self.session: Optional[CaptureSession] = None
        # Set after a commit; a new hold needs the button released first.
        self.latched = False

    @property
    def active(self) -> bool:
        return self.session is not None

    @property
    def progress(self) -> float:
        return self.session.progress if self.session else 0.0

    @property
    def candidate(self) -> Optional[SpotlightCandidate]:
        return self.session.candidate if self.session else None

    def reset(self) -> None:
        self.session = None
        self.state = CaptureState.IDLE

    def _begin(self, candidate: SpotlightCandidate, now: float) -> None:
        self.session = CaptureSession(candidate=candidate, key=candidate.key, start=now)
        self.state = CaptureState.HOLDING
        LOG.debug("hold: start '%s' (%s)", candidate.word, self.session.key)

    def update(self, now: float, button_down: bool, scan: ScanResult) -> Optional[str]:
        """Advance one frame. Returns the word committed this frame, if any."""
        if not button_down:
            if self.session is not None:
                LOG.debug("hold: released '%s' at %.2f", self.session.candidate.word, self.session.progress)
            self.reset()
            self.latched = False
            return None
        if self.latched:
            return None

        if self.session is not None and self.session.key not in scan.keys():
            LOG.debug("hold: lost '%s'; progress reset", self.session.candidate.word)
            self.reset()

        if self.session is None:
            if scan.chosen is not None:
                self._begin(scan.chosen, now)
            return None

        if self.hold_seconds > 0.0:
            self.session.progress = clamp((now - self.session.start) / self.hold_seconds, 0.0, 1.0)
        else:
            self.session.progress = 1.0
        if self.session.progress < 1.0:
            return None
        return self._commit()

    def _commit(self) -> str:
        self.state = CaptureState.COMMITTING
        candidate = self.session.candidate
        self.sentence.append(candidate.word)
        for placed in self.seeder.words_touching(candidate.indices):
            self.seeder.remove(placed)
        for cell in candidate.cells:
            self.grid.release(cell)
        LOG.info("capture: '%s' -> %s", candidate.word, self.sentence.text)
        self.reset()
        self.latched = True
        return candidate.word

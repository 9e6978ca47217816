""" Unit tests for the hold-to-capture state machine and the sentence. """

import random

from word_discovery.capture import CaptureMachine, CaptureState, Sentence
from word_discovery.grid import FadeState
from word_discovery.seeder import Orientation, WordSeeder
from word_discovery.spotlight import scan_spotlight
from word_discovery.trie import PrefixTree

from tests.base import make_config, make_grid, write_run


def _setup(words=("cat",)):
    config = make_config()
    grid = make_grid(config)
    seeder = WordSeeder(grid, list(words), config)
    placed = seeder.place("cat", 2, 0, Orientation.HORIZONTAL)
    write_run(grid, 2, 0, "cat")
    sentence = Sentence(config["max_sentence_words"])
    machine = CaptureMachine(grid, seeder, sentence, config["hold_to_capture_seconds"])
    tree = PrefixTree(words)

    def scan(radius=30.0, seed=0):
        center = grid.cell(2, 1)
        return scan_spotlight(grid, tree, center.x, center.y, radius, 0.25, 3, 8, random.Random(seed))

    return grid, seeder, placed, sentence, machine, scan


def test_sentence_keeps_most_recent_words() -> None:
    sentence = Sentence(3)
    for word in ["one", "two", "three", "four", "five"]:
        sentence.append(word)
    assert sentence.words == ["three", "four", "five"]
    assert len(sentence) == 3
    assert sentence.text == "three four five"
    sentence.clear()
    assert list(sentence) == []


def test_commit_happens_exactly_at_hold_duration() -> None:
    grid, seeder, placed, sentence, machine, scan = _setup()
    assert machine.update(10.0, True, scan()) is None
    assert machine.state is CaptureState.HOLDING and machine.progress == 0.0
    assert machine.update(10.5, True, scan()) is None
    assert machine.progress == 0.5
    assert machine.update(10.99, True, scan()) is None
    assert machine.state is CaptureState.HOLDING
    assert machine.progress < 1.0
    assert sentence.words == []

    assert machine.update(11.0, True, scan()) == "cat"
    assert sentence.words == ["cat"]
    assert machine.state is CaptureState.IDLE and machine.progress == 0.0
    assert seeder.placed == []
    for cell in placed.cells:
        assert not cell.locked
        assert cell.state is FadeState.FADING_OUT and cell.staged_char is None


def test_identity_change_resets_progress() -> None:
    grid, seeder, placed, sentence, machine, scan = _setup()
    machine.update(0.0, True, scan())
    machine.update(0.6, True, scan())
    assert machine.progress == 0.6
    grid.cell(2, 1).char = "o"
    machine.update(0.7, True, scan())
    assert machine.progress == 0.0
    assert machine.state is CaptureState.IDLE
    assert sentence.words == []


def test_identity_change_to_another_word_restarts_the_hold() -> None:
    grid, seeder, placed, sentence, machine, scan = _setup(words=("cat", "cot"))
    machine.update(0.0, True, scan())
    machine.update(0.5, True, scan())
    grid.cell(2, 1).char = "o"
    machine.update(1.0, True, scan())
    assert machine.candidate.word == "cot"
    assert machine.progress == 0.0
    machine.update(1.5, True, scan())
    assert machine.progress == 0.5


def test_release_drops_the_hold() -> None:
    grid, seeder, placed, sentence, machine, scan = _setup()
    machine.update(0.0, True, scan())
    machine.update(0.5, True, scan())
    machine.update(0.6, False, scan())
    assert not machine.active and machine.progress == 0.0
    # Pressing again starts over from zero.
    machine.update(1.0, True, scan())
    machine.update(1.5, True, scan())
    assert machine.progress == 0.5
    assert seeder.placed == [placed]


def test_frozen_candidate_survives_tie_break_flips() -> None:
    grid, seeder, placed, sentence, machine, scan = _setup(words=("cat", "dot"))
    write_run(grid, 0, 2, "dot", vertical=True)
    grid.cell(2, 2).char = "t"
    machine.update(0.0, True, scan(radius=70.0, seed=0))
    held = machine.candidate.key
    for step in range(1, 10):
        machine.update(step * 0.1, True, scan(radius=70.0, seed=step))
        assert machine.candidate.key == held
    assert abs(machine.progress - 0.9) < 1e-9


def test_capture_needs_a_fresh_press_after_commit() -> None:
    grid, seeder, placed, sentence, machine, scan = _setup()
    machine.update(0.0, True, scan())
    machine.update(1.0, True, scan())
    assert sentence.words == ["cat"]
    # Letters are still readable while fading, but holding on does nothing.
    machine.update(1.1, True, scan())
    assert not machine.active
    machine.update(1.2, False, scan())
    machine.update(1.3, True, scan())
    assert machine.active and machine.candidate.word == "cat"

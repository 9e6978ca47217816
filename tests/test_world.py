""" End-to-end frames through DiscoveryWorld. """

from word_discovery.seeder import Orientation
from word_discovery.world import DiscoveryWorld, Pointer

from tests.base import make_config, make_layout


def test_scenario_capture_through_the_world() -> None:
    world = DiscoveryWorld(make_config(), ["cat"], layout=make_layout(), seed="scenario")
    placed = world.seeder.place("cat", 2, 0, Orientation.HORIZONTAL)
    assert placed is not None
    center = world.grid.cell(2, 1)
    idle = Pointer(center.x, center.y, False)
    for _ in range(8):
        world.tick(0.25, idle)
    assert [c.char for c in placed.cells] == list("cat")
    assert all(c.fade == 1.0 for c in placed.cells)

    held = Pointer(center.x, center.y, True)
    assert world.tick(0.25, held) is None
    assert world.scan.chosen.word == "cat"
    assert len(world.scan.candidates) == 1
    assert world.scan.chosen.indices == [10, 11, 12]
    for expected in (0.25, 0.5, 0.75):
        assert world.tick(0.25, held) is None
        assert world.capture.progress == expected
    assert world.tick(0.25, held) == "cat"
    assert world.sentence.words == ["cat"]
    assert world.placed_words == []


def test_world_reset_keeps_sentence_and_clamps_negative_dt() -> None:
    world = DiscoveryWorld(make_config(min_active_words=2), ["cat", "dog"], layout=make_layout(8, 8))
    world.sentence.append("kept")
    world.tick(-1.0, Pointer())
    assert world.now == 0.0 and world.frame == 1
    assert len(world.placed_words) == 2
    world.reset()
    assert world.placed_words == []
    assert world.sentence.words == ["kept"]


def test_same_seed_same_inputs_same_session() -> None:
    """ Two worlds fed the same frames stay letter-for-letter identical. """
    config = make_config(
        min_active_words=3,
        seed_words_per_minute=120.0,
        change_probability_per_cycle=0.5,
        fade_duration_range_sec=(0.2, 0.6),
    )
    words = ["cat", "dog", "sun", "tree"]
    worlds = [DiscoveryWorld(config, words, layout=make_layout(8, 8), seed="twin") for _ in range(2)]
    pointer = Pointer(100.0, 100.0, True)
    for _ in range(120):
        results = [w.tick(1.0 / 30.0, pointer) for w in worlds]
        assert results[0] == results[1]
    a, b = worlds
    assert a.grid.text_rows() == b.grid.text_rows()
    assert [p.key for p in a.placed_words] == [p.key for p in b.placed_words]
    assert a.sentence.words == b.sentence.words

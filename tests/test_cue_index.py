import random

from hearlingo.cue_index import CueIndex
from hearlingo.models import Cue


def _linear_scan(cues, time):
    for cue in cues:
        if cue.start_seconds <= time < cue.start_seconds + cue.duration_seconds:
            return cue
    return None


def _probe_times(cues):
    times = [-1.0]
    for cue in cues:
        times.extend([
            cue.start_seconds,
            cue.start_seconds + cue.duration_seconds / 2,
            cue.start_seconds + cue.duration_seconds,
            cue.start_seconds + cue.duration_seconds + 0.01,
        ])
    return times


def test_active_cue_inside_single_interval(sample_cues):
    index = CueIndex.build(sample_cues)
    assert index.active_cue_at(0.0).text == "one"
    assert index.active_cue_at(1.99).text == "one"
    assert index.active_cue_at(2.0).text == "two"
    assert index.active_cue_at(4.5).text == "three"
    assert index.active_cue_at(8.9).text == "four"


def test_active_cue_outside_intervals(sample_cues):
    index = CueIndex.build(sample_cues)
    assert index.active_cue_at(-0.5) is None
    assert index.active_cue_at(3.5) is None  # end is exclusive, gap follows
    assert index.active_cue_at(3.75) is None
    assert index.active_cue_at(9.0) is None
    assert index.active_cue_at(100.0) is None


def test_zero_duration_cue_never_active(sample_cues):
    index = CueIndex.build(sample_cues)
    # "zero" starts at 6.0 with no duration; "four" shares its start
    assert index.active_cue_at(6.0).text == "four"


def test_empty_index():
    index = CueIndex.build([])
    assert len(index) == 0
    assert index.active_cue_at(0.0) is None
    assert index.active_index_at(0.0) is None


def test_active_index_matches_cue(sample_cues):
    index = CueIndex.build(sample_cues)
    position = index.active_index_at(4.2)
    assert position == 2
    assert index[position] is index.active_cue_at(4.2)


def test_binary_search_agrees_with_linear_scan():
    rng = random.Random(1234)
    for _ in range(50):
        cues = []
        time = 0.0
        for _ in range(rng.randint(1, 200)):
            # quarter seconds are exact floats, so starts never dip below the previous end
            time += rng.randint(0, 8) * 0.25
            duration = rng.randint(0, 16) * 0.25
            cues.append(Cue(time, duration, "x"))
            time += duration
        index = CueIndex.build(cues)
        for t in _probe_times(cues):
            assert index.active_cue_at(t) == _linear_scan(cues, t), t


def test_overlapping_cues_return_some_containing_cue():
    rng = random.Random(99)
    for _ in range(50):
        cues = sorted(
            (Cue(rng.randint(0, 400) * 0.25, rng.randint(0, 40) * 0.25, "x") for _ in range(rng.randint(1, 80))),
            key=lambda c: c.start_seconds,
        )
        index = CueIndex.build(cues)
        for t in _probe_times(cues):
            found = index.active_cue_at(t)
            if _linear_scan(cues, t) is None:
                assert found is None
            else:
                assert found is not None and found.contains(t)


def test_overlapping_cue_lookup_finds_containing_cue():
    cues = [Cue(0.0, 10.0, "long"), Cue(2.0, 1.0, "short"), Cue(4.0, 1.0, "later")]
    index = CueIndex.build(cues)
    assert index.active_cue_at(2.5).text in ("long", "short")
    assert index.active_cue_at(4.5).text in ("long", "later")
    assert index.active_cue_at(9.0).text == "long"


def test_build_sorts_out_of_order_cues():
    cues = [Cue(5.0, 1.0, "b"), Cue(1.0, 1.0, "a"), Cue(5.0, 2.0, "c")]
    index = CueIndex.build(cues)
    assert [c.text for c in index] == ["a", "b", "c"]
    assert index.active_cue_at(1.5).text == "a"


def test_build_keeps_ordered_input_untouched(sample_cues):
    index = CueIndex.build(sample_cues)
    assert list(index.cues) == sample_cues

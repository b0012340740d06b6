from __future__ import annotations

import pytest

from lyrics_sync.lrc.model import Timeline, TimedLine
from lyrics_sync.lrc.parse import parse_timeline
from lyrics_sync.sync.window import WINDOW_MAX_LINES, crossing_index, select_window


def _texts(window):
    return [e.text for e in window]


@pytest.fixture
def scenario():
    return parse_timeline("Song", None, "[00:00.0]Line A\n[00:02.5]Line B\n[00:05.0]Line C")


@pytest.fixture
def long_timeline():
    body = "\n".join(f"[00:{i * 2:02d}.00]l{i}" for i in range(10))
    return parse_timeline("Song", None, body)


def test_scenario_window(scenario):
    assert _texts(select_window(scenario, 2600)) == ["Line A", "Line B", "Line C"]


def test_window_at_start_includes_header(scenario):
    # first line >= -5 is the header itself
    assert _texts(select_window(scenario, -5)) == ["Song", "Line A", "Line B"]
    assert _texts(select_window(scenario, 0)) == ["Song", "Line A", "Line B", "Line C"]


def test_window_exact_timestamp_is_crossing(scenario):
    assert crossing_index(scenario, 2500) == 2
    assert _texts(select_window(scenario, 2500)) == ["Song", "Line A", "Line B", "Line C"]


def test_window_capped_at_four(long_timeline):
    # crossing at l5 (10000ms, index 6): indices 4..8 capped to 4..7
    w = select_window(long_timeline, 9000)
    assert _texts(w) == ["l3", "l4", "l5", "l6"]
    assert len(w) == WINDOW_MAX_LINES


def test_window_near_end(long_timeline):
    assert _texts(select_window(long_timeline, 18000)) == ["l7", "l8", "l9"]


def test_window_empty_past_end(scenario, long_timeline):
    assert select_window(scenario, 5001) == ()
    assert select_window(long_timeline, 10**9) == ()


def test_window_degenerate_timelines():
    assert select_window(Timeline.empty(), 0) == ()
    single = Timeline(lines=(TimedLine(100, "only"),))
    assert select_window(single, 50) == (TimedLine(100, "only"),)
    assert select_window(single, 100) == (TimedLine(100, "only"),)
    assert select_window(single, 101) == ()


def test_header_only_timeline():
    tl = parse_timeline("Song", None, "")
    assert _texts(select_window(tl, -100)) == ["Song"]
    assert select_window(tl, 0) == ()


def test_window_is_contiguous_and_bounded(long_timeline):
    lines = list(long_timeline.lines)
    for now in range(-2000, 22000, 250):
        w = select_window(long_timeline, now)
        assert len(w) <= WINDOW_MAX_LINES
        if w:
            start = lines.index(w[0])
            assert list(w) == lines[start : start + len(w)]


def test_window_idempotent_and_pure(scenario):
    before = scenario.lines
    first = select_window(scenario, 2600)
    assert select_window(scenario, 2600) == first
    assert scenario.lines == before


def test_duplicate_timestamps_pick_first():
    tl = parse_timeline("T", None, "[00:01.00]a\n[00:01.00]b\n[00:02.00]c")
    assert crossing_index(tl, 1000) == 1
    assert _texts(select_window(tl, 1000)) == ["T", "a", "b", "c"]

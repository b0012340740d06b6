from __future__ import annotations

from lyrics_sync.lrc.model import Timeline
from lyrics_sync.sync.session import LyricsSession

LRC = "[00:00.0]Line A\n[00:02.5]Line B\n[00:05.0]Line C"


def test_new_session_is_empty():
    s = LyricsSession()
    assert s.timeline == Timeline.empty()
    assert s.window(0) == ()
    assert not s.has_timed_lines


def test_load_publishes_new_timeline():
    s = LyricsSession()
    first = s.load("Song", "Band", LRC)
    assert s.timeline is first
    assert s.title == "Song"
    assert s.artist == "Band"
    assert s.body == LRC
    assert s.has_timed_lines

    second = s.load("Other", None, "[00:01.00]x")
    assert s.timeline is second
    # the old generation is untouched for readers still holding it
    assert [e.text for e in first.body_lines] == ["Line A", "Line B", "Line C"]


def test_changed_window_only_on_change():
    s = LyricsSession()
    s.load("Song", None, LRC)
    assert [e.text for e in s.changed_window(0)] == ["Song", "Line A", "Line B", "Line C"]
    assert s.changed_window(0) is None
    assert s.changed_window(2000) is None
    assert [e.text for e in s.changed_window(2600)] == ["Line A", "Line B", "Line C"]
    assert s.changed_window(4000) is None
    assert s.changed_window(6000) == ()
    assert s.changed_window(7000) is None


def test_load_resets_change_tracking():
    s = LyricsSession()
    s.load("Song", None, LRC)
    s.changed_window(0)
    s.load("Song", None, LRC)
    assert s.changed_window(0) is not None


def test_clear():
    s = LyricsSession()
    s.load("Song", None, LRC)
    s.clear()
    assert s.timeline == Timeline.empty()
    assert s.body == ""
    assert s.window(0) == ()

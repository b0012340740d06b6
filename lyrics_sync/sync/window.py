from __future__ import annotations

from bisect import bisect_left

from lyrics_sync.lrc.model import Timeline, TimedLine

WINDOW_BEFORE = 2
WINDOW_AFTER = 2
WINDOW_MAX_LINES = 4


def crossing_index(timeline: Timeline, current_time_ms: int) -> int | None:
    """
    First index whose timestamp is >= current_time_ms, or None when playback
    is past the last line. O(log n) via bisect on the sorted timestamps.
    """
    i = bisect_left(timeline.timestamps, current_time_ms)
    return i if i < len(timeline.timestamps) else None


def select_window(timeline: Timeline, current_time_ms: int) -> tuple[TimedLine, ...]:
    """
    Lines to show at current_time_ms: up to two before the crossing line,
    the crossing line and the lines after it, never more than four.
    """
    i = crossing_index(timeline, current_time_ms)
    if i is None:
        return ()

    start = max(i - WINDOW_BEFORE, 0)
    end = min(i + WINDOW_AFTER, len(timeline.lines) - 1)

    out: list[TimedLine] = []
    for j in range(start, end + 1):
        if len(out) >= WINDOW_MAX_LINES:
            break
        out.append(timeline.lines[j])
    return tuple(out)

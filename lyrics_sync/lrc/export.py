from __future__ import annotations

import json
from typing import Iterator

from .model import Timeline, TimedLine


def _clock_parts(ms: int) -> tuple[int, int, int, int]:
    # (hours, minutes, seconds, millis); lines shifted before 0 by an offset start at 0
    h, rem = divmod(max(ms, 0), 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, millis = divmod(rem, 1_000)
    return h, m, s, millis


def _cues(lines: tuple[TimedLine, ...], last_line_duration_ms: int) -> Iterator[tuple[int, int, str]]:
    """(start, end, text) per lyric line; a line lasts until the next one starts."""
    for line, nxt in zip(lines, (*lines[1:], None)):
        start = max(line.timestamp_ms, 0)
        end = start + last_line_duration_ms if nxt is None else max(nxt.timestamp_ms, start + 1)
        yield start, end, line.text


def export_json(timeline: Timeline) -> str:
    return json.dumps(
        {
            "title": timeline.title,
            "artist": timeline.artist,
            "offset_ms": timeline.offset_ms,
            "lines": [{"timestamp_ms": e.timestamp_ms, "text": e.text} for e in timeline.body_lines],
        },
        ensure_ascii=False,
        indent=2,
    )


def export_lrc(timeline: Timeline, include_tags: bool = True) -> str:
    """
    Normalized LRC of the lyric lines, header excluded. The offset is already
    folded into the timestamps, so no [offset:] tag is written.
    """
    out: list[str] = []
    if include_tags:
        out.extend(f"[{k}:{v}]" for k, v in (("ti", timeline.title), ("ar", timeline.artist)) if v)

    for e in timeline.body_lines:
        h, m, s, millis = _clock_parts(e.timestamp_ms)
        # minutes keep counting past the hour, centiseconds as most players write them
        out.append(f"[{h * 60 + m:02d}:{s:02d}.{millis // 10:02d}]{e.text}")
    return "\n".join(out) + ("\n" if out else "")


def export_srt(timeline: Timeline, last_line_duration_ms: int = 2000) -> str:
    blocks: list[str] = []
    for i, (start, end, text) in enumerate(_cues(timeline.body_lines, last_line_duration_ms), start=1):
        stamps = [
            "{:02d}:{:02d}:{:02d},{:03d}".format(*_clock_parts(ms)) for ms in (start, end)
        ]
        blocks.append(f"{i}\n{stamps[0]} --> {stamps[1]}\n{text}\n")
    return "\n".join(blocks)

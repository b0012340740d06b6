from __future__ import annotations

import sys
from typing import TextIO

from lyrics_sync.lrc.model import Timeline, TimedLine

from .base import LineRole, LyricsRenderer, style_window


class PlainRenderer(LyricsRenderer):
    """Frames as plain text, one block per change. Suited for pipes and logs."""

    separator = "---"

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdout

    def render_window(self, timeline: Timeline, window: tuple[TimedLine, ...]) -> None:
        out: list[str] = []
        for role, text in style_window(timeline, window):
            if role is LineRole.HEADER:
                out.append(f"# {text}")
            elif role is LineRole.CURRENT:
                out.append(f"> {text}")
            else:
                out.append(f"  {text}")
        self._emit(out)

    def render_static(self, title: str, artist: str | None, body: str) -> None:
        out = [f"# {title}"]
        if artist:
            out.append(f"# {artist}")
        out.append("")
        out.extend(ln.rstrip() for ln in body.splitlines())
        self._emit(out)

    def render_message(self, title: str, message: str) -> None:
        self._emit([f"# {title}", f"! {message}"])

    def _emit(self, out: list[str]) -> None:
        self.stream.write("\n".join([*out, self.separator]) + "\n")
        self.stream.flush()

from __future__ import annotations

from lyrics_sync.lrc.model import Timeline, TimedLine
from lyrics_sync.render.base import LyricsRenderer


class RecordingRenderer(LyricsRenderer):
    """Collects every call instead of drawing."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.entered = 0
        self.exited = 0

    def enter(self) -> None:
        self.entered += 1

    def exit(self) -> None:
        self.exited += 1

    def render_window(self, timeline: Timeline, window: tuple[TimedLine, ...]) -> None:
        self.calls.append(("window", tuple(e.text for e in window)))

    def render_static(self, title: str, artist: str | None, body: str) -> None:
        self.calls.append(("static", title, artist, body))

    def render_message(self, title: str, message: str) -> None:
        self.calls.append(("message", title, message))

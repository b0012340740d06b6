from __future__ import annotations

from enum import Enum

from lyrics_sync.lrc.model import Timeline, TimedLine


class LineRole(str, Enum):
    HEADER = "header"
    CURRENT = "current"
    CONTEXT = "context"


def style_window(timeline: Timeline, window: tuple[TimedLine, ...]) -> list[tuple[LineRole, str]]:
    """
    Shared presentation rule for every adapter: the title header keeps its own
    style, the second entry of the window is the line being sung once it has
    a non-negative timestamp.
    """
    header = timeline.header
    out: list[tuple[LineRole, str]] = []
    for pos, line in enumerate(window):
        if pos == 0 and header is not None and line == header:
            out.append((LineRole.HEADER, line.text))
        elif pos == 1 and line.timestamp_ms >= 0:
            out.append((LineRole.CURRENT, line.text))
        else:
            out.append((LineRole.CONTEXT, line.text))
    return out


class LyricsRenderer:
    def __enter__(self):
        self.enter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.exit()

    def enter(self) -> None:
        pass

    def exit(self) -> None:
        pass

    def render_window(self, timeline: Timeline, window: tuple[TimedLine, ...]) -> None:
        raise NotImplementedError

    def render_static(self, title: str, artist: str | None, body: str) -> None:
        raise NotImplementedError

    def render_message(self, title: str, message: str) -> None:
        raise NotImplementedError

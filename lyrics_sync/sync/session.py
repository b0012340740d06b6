from __future__ import annotations

from dataclasses import dataclass, field
import logging

from lyrics_sync.lrc.model import Timeline, TimedLine
from lyrics_sync.lrc.parse import parse_timeline

from .window import select_window

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LyricsSession:
    """
    Current lyrics state for one playback session.

    `load` publishes a freshly parsed timeline by replacing the reference, so a
    reader holding the previous timeline keeps a consistent object.
    `changed_window` updates only on change, like a render-on-change tick.
    """

    timeline: Timeline = field(default_factory=Timeline.empty)
    body: str = ""
    last_window: tuple[TimedLine, ...] | None = None

    @property
    def title(self) -> str:
        return self.timeline.title

    @property
    def artist(self) -> str | None:
        return self.timeline.artist

    @property
    def has_timed_lines(self) -> bool:
        return len(self.timeline) > 1

    def load(self, title: str, artist: str | None, body: str | None) -> Timeline:
        timeline = parse_timeline(title, artist, body)
        self.body = body or ""
        self.timeline = timeline
        self.last_window = None
        logger.info(
            "Loaded lyrics for '%s': %d timed lines, offset %dms",
            title,
            len(timeline.body_lines),
            timeline.offset_ms,
        )
        return timeline

    def clear(self) -> None:
        self.timeline = Timeline.empty()
        self.body = ""
        self.last_window = None

    def window(self, now_ms: int) -> tuple[TimedLine, ...]:
        return select_window(self.timeline, now_ms)

    def changed_window(self, now_ms: int) -> tuple[TimedLine, ...] | None:
        w = self.window(now_ms)
        if w != self.last_window:
            self.last_window = w
            return w
        return None

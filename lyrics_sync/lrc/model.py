from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True, slots=True)
class TimedLine:
    timestamp_ms: int
    text: str


@dataclass(frozen=True, slots=True)
class Timeline:
    """
    One fully parsed lyrics payload.

    Lines are sorted by timestamp (ties keep extraction order). Timelines built
    by the parser always start with the title header, whose timestamp is below
    every other entry.
    """

    lines: tuple[TimedLine, ...]
    title: str = ""
    artist: str | None = None
    offset_ms: int = 0
    timestamps: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamps", tuple(line.timestamp_ms for line in self.lines))

    @classmethod
    def empty(cls) -> "Timeline":
        return cls(lines=())

    @property
    def header(self) -> TimedLine | None:
        return self.lines[0] if self.lines else None

    @property
    def body_lines(self) -> tuple[TimedLine, ...]:
        return self.lines[1:]

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[TimedLine]:
        return iter(self.lines)

    def __getitem__(self, idx: int) -> TimedLine:
        return self.lines[idx]

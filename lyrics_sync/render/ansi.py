from __future__ import annotations

import shutil
import signal
import sys
from dataclasses import dataclass
from typing import Callable

from colorama import just_fix_windows_console

from lyrics_sync.lrc.model import Timeline, TimedLine

from .base import LineRole, LyricsRenderer, style_window

CSI = "\x1b["


def _sgr(*codes: int) -> str:
    return CSI + ";".join(str(c) for c in codes) + "m"


@dataclass(frozen=True, slots=True)
class Theme:
    title: str = _sgr(36, 1)  # cyan bold
    artist: str = _sgr(36, 3)  # cyan italic
    current: str = _sgr(33, 1)  # yellow bold
    dim: str = _sgr(90)  # bright black
    text: str = _sgr(37)  # white
    warning: str = _sgr(33, 1)  # yellow bold
    reset: str = _sgr(0)


class AnsiRenderer(LyricsRenderer):
    def __init__(self, use_alt_screen: bool = True, theme: Theme | None = None):
        self.use_alt_screen = use_alt_screen
        self.theme = theme or Theme()
        self._entered = False
        self._resize_handler: Callable[..., None] | None = None
        self._last_frame: list[str] | None = None

    def enter(self) -> None:
        if self._entered:
            return
        just_fix_windows_console()
        if self.use_alt_screen:
            sys.stdout.write(CSI + "?1049h")  # alt screen
        sys.stdout.write(CSI + "?25l")  # hide cursor
        sys.stdout.write(CSI + "H" + CSI + "2J")  # home + clear
        sys.stdout.flush()
        self._entered = True

        def _on_resize(signum=None, frame=None):
            if self._last_frame is not None:
                self._draw(self._last_frame)

        self._resize_handler = _on_resize
        if hasattr(signal, "SIGWINCH"):
            signal.signal(signal.SIGWINCH, _on_resize)

    def exit(self) -> None:
        if not self._entered:
            return
        if self._resize_handler and hasattr(signal, "SIGWINCH"):
            signal.signal(signal.SIGWINCH, signal.SIG_DFL)
        self._resize_handler = None
        sys.stdout.write(self.theme.reset)
        sys.stdout.write(CSI + "?25h")  # show cursor
        if self.use_alt_screen:
            sys.stdout.write(CSI + "?1049l")  # normal screen
        sys.stdout.flush()
        self._entered = False
        self._last_frame = None

    def _heading(self, title: str, artist: str | None) -> list[str]:
        out = [f"{self.theme.title}♫ {title} ♫{self.theme.reset}"]
        if artist:
            out.append(f"{self.theme.artist}{artist}{self.theme.reset}")
        return out

    def render_window(self, timeline: Timeline, window: tuple[TimedLine, ...]) -> None:
        out = self._heading(timeline.title, timeline.artist)
        out.append("")
        for role, text in style_window(timeline, window):
            if role is LineRole.HEADER:
                out.append(f"{self.theme.title}{text}{self.theme.reset}")
            elif role is LineRole.CURRENT:
                out.append(f"{self.theme.current}{text}{self.theme.reset}")
            else:
                out.append(f"{self.theme.text}{text}{self.theme.reset}")
        self._draw(out)

    def render_static(self, title: str, artist: str | None, body: str) -> None:
        out = self._heading(title, artist)
        out.append("")
        out.extend(f"{self.theme.text}{ln.rstrip()}{self.theme.reset}" for ln in body.splitlines())
        self._draw(out)

    def render_message(self, title: str, message: str) -> None:
        out = self._heading(title, None)
        out.append(f"{self.theme.warning}{message}{self.theme.reset}")
        self._draw(out)

    def _draw(self, out: list[str]) -> None:
        # Store frame for SIGWINCH redraw
        self._last_frame = out

        _cols, rows = shutil.get_terminal_size(fallback=(80, 24))
        visible = out[: max(rows, 1)]

        # move home + clear, then print full frame
        sys.stdout.write(CSI + "H" + CSI + "2J")
        sys.stdout.write("\n".join(visible))
        sys.stdout.write(self.theme.reset)
        sys.stdout.flush()

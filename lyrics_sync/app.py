from __future__ import annotations

import logging
import time
from typing import Callable

from lyrics_sync.config import AppConfig
from lyrics_sync.i18n import t
from lyrics_sync.render.base import LyricsRenderer
from lyrics_sync.sync.clock import PlaybackClock
from lyrics_sync.sync.session import LyricsSession

logger = logging.getLogger(__name__)


def play(
    cfg: AppConfig,
    session: LyricsSession,
    clock: PlaybackClock,
    renderer: LyricsRenderer,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Main tick loop:
    clock -> position -> window -> render on change.

    With sync disabled (or no timed lines) the lyrics are drawn once as static
    text and the window selector is never consulted.
    """
    tick_s = 1.0 / max(cfg.refresh_hz, 1.0)

    with renderer:
        if not cfg.sync_lyrics or not session.has_timed_lines:
            title = session.title
            if cfg.sync_lyrics:
                logger.info("No timed lines for '%s', showing static lyrics", session.title)
                # visual indicator for unsynced lyrics
                title = f"{title} ({t('unsynced_lyrics')})"
            renderer.render_static(title, session.artist, session.body)
            while not clock.finished():
                sleep(tick_s)
            return 0

        ticks = 0
        while not clock.finished():
            pos_ms = clock.position_ms()
            window = session.changed_window(pos_ms)
            if window is not None:
                logger.debug("Window changed at %dms: %d lines", pos_ms, len(window))
                if window:
                    renderer.render_window(session.timeline, window)
                else:
                    renderer.render_message(session.title, t("end_of_lyrics"))
            ticks += 1
            sleep(tick_s)

        logger.debug("Playback finished after %d ticks", ticks)
    return 0

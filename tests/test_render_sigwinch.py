from __future__ import annotations

import signal
from unittest.mock import patch

from lyrics_sync.render.ansi import AnsiRenderer


class TestAnsiRendererSigwinch:
    """Test SIGWINCH handling in renderer."""

    def test_sigwinch_registered_on_enter(self):
        renderer = AnsiRenderer(use_alt_screen=False)
        old_handler = signal.getsignal(signal.SIGWINCH)

        renderer.enter()
        try:
            assert signal.getsignal(signal.SIGWINCH) is not old_handler
            assert signal.getsignal(signal.SIGWINCH) is renderer._resize_handler
        finally:
            renderer.exit()
            signal.signal(signal.SIGWINCH, old_handler)

    def test_sigwinch_restored_on_exit(self):
        renderer = AnsiRenderer(use_alt_screen=False)
        old_handler = signal.getsignal(signal.SIGWINCH)

        renderer.enter()
        renderer.exit()
        try:
            assert signal.getsignal(signal.SIGWINCH) == signal.SIG_DFL
            assert renderer._resize_handler is None
        finally:
            signal.signal(signal.SIGWINCH, old_handler)

    def test_sigwinch_redraws_last_frame(self):
        renderer = AnsiRenderer(use_alt_screen=False)
        old_handler = signal.getsignal(signal.SIGWINCH)
        renderer.enter()
        try:
            renderer.render_message("Title", "hello")
            frame = renderer._last_frame
            assert frame is not None

            with patch.object(renderer, "_draw") as mock_draw:
                renderer._resize_handler()
                mock_draw.assert_called_once_with(frame)
        finally:
            renderer.exit()
            signal.signal(signal.SIGWINCH, old_handler)

    def test_last_frame_cleared_on_exit(self):
        renderer = AnsiRenderer(use_alt_screen=False)
        old_handler = signal.getsignal(signal.SIGWINCH)
        renderer.enter()
        assert renderer._last_frame is None
        renderer.render_message("Title", "hello")
        assert renderer._last_frame is not None
        renderer.exit()
        signal.signal(signal.SIGWINCH, old_handler)
        assert renderer._last_frame is None

"""Tests for signal handling utilities."""

import os
import signal
import sys

import pytest

from streamdeck_xl._signal import interruptible


class TestInterruptible:
    """Tests for interruptible context manager."""

    def test_yields_unset_event(self) -> None:
        """The event should start cleared."""
        with interruptible() as stop:
            assert stop.is_set() is False

    def test_wait_respects_timeout(self) -> None:
        """wait() should time out while no signal arrives."""
        with interruptible() as stop:
            assert stop.wait(0.01) is False

    def test_sigint_sets_event(self) -> None:
        """SIGINT inside the block should set the event instead of raising."""
        with interruptible() as stop:
            signal.raise_signal(signal.SIGINT)
            assert stop.wait(1.0) is True

    @pytest.mark.skipif(sys.platform == "win32", reason="no SIGTERM delivery")
    def test_sigterm_sets_event(self) -> None:
        """SIGTERM inside the block should set the event."""
        with interruptible() as stop:
            os.kill(os.getpid(), signal.SIGTERM)
            assert stop.wait(1.0) is True

    def test_restores_handlers(self) -> None:
        """Previous handlers should be reinstalled on exit."""
        before = signal.getsignal(signal.SIGINT)
        with interruptible():
            assert signal.getsignal(signal.SIGINT) is not before
        assert signal.getsignal(signal.SIGINT) is before

    def test_restores_handlers_on_error(self) -> None:
        """Handlers should be restored even when the block raises."""
        before = signal.getsignal(signal.SIGINT)
        with pytest.raises(RuntimeError), interruptible():
            raise RuntimeError("boom")
        assert signal.getsignal(signal.SIGINT) is before

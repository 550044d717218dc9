"""Signal handling for commands that run until interrupted."""

from __future__ import annotations

import signal
import sys
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator


@contextmanager
def interruptible() -> Generator[threading.Event]:
    """Yield an event that is set on SIGINT or SIGTERM.

    Handlers are restored on exit. Typical use blocks the main thread
    while device callbacks run on the reader thread:

        with interruptible() as stop:
            stop.wait()
    """
    stop = threading.Event()

    def handler(signum: int, frame: object) -> None:
        stop.set()

    old_sigint = signal.signal(signal.SIGINT, handler)
    old_sigterm = None
    if sys.platform != "win32":
        old_sigterm = signal.signal(signal.SIGTERM, handler)

    try:
        yield stop
    finally:
        signal.signal(signal.SIGINT, old_sigint)
        if old_sigterm is not None:
            signal.signal(signal.SIGTERM, old_sigterm)

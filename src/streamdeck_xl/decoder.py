"""Input report decoding into key press/release edges."""

from streamdeck_xl.constants import (
    INPUT_HEADER_SIZE,
    INPUT_TRAILER_SIZE,
    MIN_INPUT_REPORT_SIZE,
    NUM_KEYS,
)
from streamdeck_xl.exceptions import MalformedReportError
from streamdeck_xl.models import EventType, KeyEvent


class KeyStateDecoder:
    """Track key states and turn periodic status reports into edge events.

    The device reports the full state of all 32 keys in every input report.
    Only keys whose state differs from the previous report produce an event.
    """

    __slots__ = ("_states",)

    def __init__(self) -> None:
        self._states = [False] * NUM_KEYS

    @property
    def key_states(self) -> tuple[bool, ...]:
        """Snapshot of the pressed state of every key."""
        return tuple(self._states)

    def reset(self) -> None:
        """Mark every key as released."""
        self._states = [False] * NUM_KEYS

    def decode(self, report: bytes) -> list[KeyEvent]:
        """Apply one input report and return the resulting key edges.

        Args:
            report: Raw input report: 4 metadata bytes, 32 key status bytes,
                1 trailing padding byte. Longer reports are accepted; only
                the first 32 status bytes are used.

        Returns:
            Events in ascending key order, empty if nothing changed.

        Raises:
            MalformedReportError: If the report is shorter than 37 bytes.
                Key state is left untouched.
        """
        if len(report) < MIN_INPUT_REPORT_SIZE:
            msg = (
                f"Input report must be at least {MIN_INPUT_REPORT_SIZE} bytes, "
                f"got {len(report)}"
            )
            raise MalformedReportError(msg)

        status = report[INPUT_HEADER_SIZE : len(report) - INPUT_TRAILER_SIZE]

        events: list[KeyEvent] = []
        for key in range(NUM_KEYS):
            pressed = status[key] == 1
            if pressed == self._states[key]:
                continue
            self._states[key] = pressed
            event_type = EventType.DOWN if pressed else EventType.UP
            events.append(KeyEvent(event_type, key))
        return events

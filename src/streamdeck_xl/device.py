"""Device detection and session management for the Stream Deck XL."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Self

from streamdeck_xl.constants import ICON_SIZE, NUM_KEYS, PRODUCT_ID, VENDOR_ID
from streamdeck_xl.decoder import KeyStateDecoder
from streamdeck_xl.exceptions import (
    DeviceCommunicationError,
    DeviceNotFoundError,
    MalformedReportError,
)
from streamdeck_xl.icon import (
    compress_icon,
    solid_icon,
    to_canonical_icon,
    transform_high_res,
)
from streamdeck_xl.models import DeviceInfo, EventType
from streamdeck_xl.protocol import (
    build_brightness_report,
    check_key_index,
    check_rgb_value,
    iter_frames,
)
from streamdeck_xl.transport import HIDTransport

if TYPE_CHECKING:
    from collections.abc import Callable, Generator

logger = logging.getLogger(__name__)


def enumerate_devices() -> list[DeviceInfo]:
    """Enumerate all attached Stream Deck XL devices.

    Returns:
        Devices in hidapi enumeration order.
    """
    return [
        dev
        for dev in HIDTransport.enumerate(VENDOR_ID, 0)
        if dev.vendor_id == VENDOR_ID and dev.product_id == PRODUCT_ID
    ]


def find_device_info() -> DeviceInfo:
    """Find the first attached Stream Deck XL.

    Raises:
        DeviceNotFoundError: If no compatible device is found.
    """
    devices = enumerate_devices()
    if not devices:
        raise DeviceNotFoundError
    return devices[0]


class StreamDeckXL:
    """Session with a single Stream Deck XL.

    Owns the HID handle and the key state of one device. Rendering and
    brightness calls block until the device has accepted every report.
    Key events are delivered on the transport's reader thread.

    Example:
        with StreamDeckXL() as deck:
            deck.on("down", lambda key: deck.fill_color(key, 255, 0, 0))
            deck.on("up", deck.clear_key)
            deck.set_brightness(70)
    """

    ICON_SIZE = ICON_SIZE
    KEY_COUNT = NUM_KEYS

    def __init__(self, path: bytes | None = None, clear_on_exit: bool = False) -> None:
        """Initialize the session.

        Args:
            path: HID path of the device. If omitted, the first attached
                Stream Deck XL is used when the session is opened.
            clear_on_exit: Whether to clear all keys when closing.
        """
        self._path = path
        self._clear_on_exit = clear_on_exit
        self._transport: HIDTransport | None = None
        self._decoder = KeyStateDecoder()
        self._lock = threading.Lock()
        self._listeners: dict[EventType, list[Callable[[Any], None]]] = {
            event: [] for event in EventType
        }

    def __enter__(self) -> Self:
        """Open connection to the device."""
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Close connection and optionally clear the keys."""
        if self._transport is None:
            return
        try:
            if self._clear_on_exit:
                self.clear_all_keys()
        finally:
            self.close()

    @property
    def path(self) -> bytes | None:
        """HID path of the device, resolved once the session is opened."""
        return self._path

    @property
    def is_open(self) -> bool:
        """Check if the session holds an open handle."""
        return self._transport is not None

    @property
    def key_states(self) -> tuple[bool, ...]:
        """Pressed state of every key as of the last input report."""
        with self._lock:
            return self._decoder.key_states

    def open(self) -> None:
        """Open the device and start listening for key events.

        Raises:
            DeviceNotFoundError: If no path was given and no device is attached.
            DeviceCommunicationError: If the device cannot be opened.
        """
        if self._transport is not None:
            return
        if self._path is None:
            self._path = find_device_info().path
        logger.debug("Opening Stream Deck XL at %r", self._path)

        transport = HIDTransport(self._path)
        transport.open()
        with self._lock:
            self._decoder.reset()
        transport.on_data(self._handle_report)
        transport.on_error(self._handle_error)
        self._transport = transport
        transport.start()

    def close(self) -> None:
        """Stop listening and release the handle."""
        with self._lock:
            transport = self._transport
            self._transport = None
        # Closing joins the reader, which may be waiting on the lock
        if transport is not None:
            transport.close()

    def on(self, event: EventType | str, callback: Callable[[Any], None]) -> None:
        """Register a listener.

        Args:
            event: ``"down"`` or ``"up"`` (called with the key index) or
                ``"error"`` (called with the exception).
            callback: Function to call.
        """
        self._listeners[EventType(event)].append(callback)

    def off(self, event: EventType | str, callback: Callable[[Any], None]) -> None:
        """Remove a previously registered listener."""
        self._listeners[EventType(event)].remove(callback)

    def fill_color(self, key: int, r: int, g: int, b: int) -> None:
        """Fill a key with a solid color.

        Args:
            key: Key index 0-31.
            r: Red 0-255.
            g: Green 0-255.
            b: Blue 0-255.

        Raises:
            InvalidArgumentError: If any argument is out of range.
            DeviceCommunicationError: If sending fails.
        """
        check_key_index(key)
        check_rgb_value(r)
        check_rgb_value(g)
        check_rgb_value(b)
        self._send_icon(key, solid_icon(r, g, b))

    def fill_image(self, key: int, image: bytes) -> None:
        """Fill a key with raw RGB pixel data.

        Args:
            key: Key index 0-31.
            image: 27360 bytes (drawn rotated by 180 degrees) or 72x72x3 =
                15552 bytes (scaled up to 96x96).

        Raises:
            InvalidArgumentError: If the key or buffer length is invalid.
            DeviceCommunicationError: If sending fails.
        """
        check_key_index(key)
        self._send_icon(key, to_canonical_icon(image))

    def fill_image_96(self, key: int, image: bytes) -> None:
        """Fill a key with a 27360-byte HighRes buffer."""
        check_key_index(key)
        self._send_icon(key, transform_high_res(image))

    def clear_key(self, key: int) -> None:
        """Clear a key to black."""
        self.fill_color(key, 0, 0, 0)

    def clear_all_keys(self) -> None:
        """Clear every key, stopping at the first failure."""
        for key in range(NUM_KEYS):
            self.clear_key(key)

    def set_brightness(self, percentage: int) -> None:
        """Set the panel brightness.

        Raises:
            InvalidArgumentError: If percentage is outside 0-100.
            DeviceCommunicationError: If sending fails.
        """
        self.send_feature_report(build_brightness_report(percentage))

    def write(self, data: bytes) -> int:
        """Write a raw output report to the device."""
        transport = self._require_transport()
        with self._lock:
            return transport.write(data)

    def send_feature_report(self, data: bytes) -> int:
        """Send a raw feature report to the device."""
        transport = self._require_transport()
        with self._lock:
            return transport.send_feature_report(data)

    def _send_icon(self, key: int, pixels: bytes) -> None:
        """Compress a canonical icon and stream it to a key."""
        transport = self._require_transport()
        payload = compress_icon(pixels)
        logger.debug("Sending %d byte icon to key %d", len(payload), key)
        with self._lock:
            for frame in iter_frames(payload, key):
                transport.write(frame)

    def _require_transport(self) -> HIDTransport:
        if self._transport is None:
            msg = "Device not opened"
            raise DeviceCommunicationError(msg)
        return self._transport

    def _handle_report(self, report: bytes) -> None:
        error: MalformedReportError | None = None
        events = []
        with self._lock:
            try:
                events = self._decoder.decode(report)
            except MalformedReportError as e:
                logger.warning("Dropping input report: %s", e)
                error = e

        if error is not None:
            self._emit(EventType.ERROR, error)
            return
        for event in events:
            self._emit(event.type, event.key)

    def _handle_error(self, error: BaseException) -> None:
        self._emit(EventType.ERROR, error)

    def _emit(self, event: EventType, value: Any) -> None:
        listeners = list(self._listeners[event])
        if event is EventType.ERROR and not listeners:
            logger.error("Unhandled device error: %s", value)
            return
        for callback in listeners:
            try:
                callback(value)
            except Exception as e:
                logger.exception("Listener for %s event failed", event.value)
                # Errors raised by error listeners are only logged
                if event is not EventType.ERROR:
                    self._emit(EventType.ERROR, e)


@contextmanager
def open_device(
    path: bytes | None = None, clear_on_exit: bool = False
) -> Generator[StreamDeckXL]:
    """Context manager for opening a Stream Deck XL.

    Args:
        path: HID path of the device, or None for the first one attached.
        clear_on_exit: Whether to clear all keys when closing.

    Yields:
        An opened StreamDeckXL instance.
    """
    deck = StreamDeckXL(path, clear_on_exit=clear_on_exit)
    with deck:
        yield deck

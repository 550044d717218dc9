"""USB HID transport built on hidapi.

Wraps a ``hid.device`` handle with blocking writes and feature reports,
and runs a background reader thread that pushes incoming input reports
and read failures to registered callbacks.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Self

import hid

from streamdeck_xl.constants import INPUT_READ_SIZE, READ_POLL_MS
from streamdeck_xl.exceptions import DeviceCommunicationError
from streamdeck_xl.models import DeviceInfo

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class HIDTransport:
    """Blocking HID transport with an input reader thread.

    Example:
        with HIDTransport(path) as transport:
            transport.on_data(handle_report)
            transport.start()
            transport.write(frame)
    """

    def __init__(self, path: bytes) -> None:
        """Initialize the transport.

        Args:
            path: Platform HID path as returned by enumeration.
        """
        self._path = path
        self._device: Any = None
        self._data_callback: Callable[[bytes], None] | None = None
        self._error_callback: Callable[[BaseException], None] | None = None
        self._reader: threading.Thread | None = None
        self._stopping = threading.Event()

    @staticmethod
    def enumerate(vendor_id: int = 0, product_id: int = 0) -> list[DeviceInfo]:
        """List attached HID devices, optionally filtered by vendor/product."""
        return [
            DeviceInfo.from_hid(info) for info in hid.enumerate(vendor_id, product_id)
        ]

    @property
    def path(self) -> bytes:
        """Return the HID path this transport was created for."""
        return self._path

    @property
    def is_open(self) -> bool:
        """Check if the handle is open."""
        return self._device is not None

    def __enter__(self) -> Self:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.close()

    def open(self) -> None:
        """Open the HID handle.

        Raises:
            DeviceCommunicationError: If the device cannot be opened.
        """
        device = hid.device()
        try:
            device.open_path(self._path)
        except OSError as e:
            msg = f"Failed to open device: {e}"
            raise DeviceCommunicationError(msg) from e
        self._device = device
        self._stopping.clear()

    def close(self) -> None:
        """Stop the reader thread and close the handle."""
        self._stopping.set()
        reader = self._reader
        if reader is not None and reader is not threading.current_thread():
            reader.join()
        self._reader = None
        if self._device is not None:
            try:
                self._device.close()
            finally:
                self._device = None

    def on_data(self, callback: Callable[[bytes], None]) -> None:
        """Register the callback receiving each input report."""
        self._data_callback = callback

    def on_error(self, callback: Callable[[BaseException], None]) -> None:
        """Register the callback receiving read failures."""
        self._error_callback = callback

    def start(self) -> None:
        """Start delivering input reports to the data callback."""
        if self._device is None:
            msg = "Device not opened"
            raise DeviceCommunicationError(msg)
        if self._reader is not None and self._reader.is_alive():
            return
        self._reader = threading.Thread(
            target=self._read_loop, name="streamdeck-xl-reader", daemon=True
        )
        self._reader.start()

    def write(self, data: bytes) -> int:
        """Write an output report.

        Returns:
            Number of bytes written.

        Raises:
            DeviceCommunicationError: If the write fails or is rejected.
        """
        device = self._require_device()
        try:
            result: int = device.write(data)
        except (OSError, ValueError) as e:
            msg = f"Failed to write report: {e}"
            raise DeviceCommunicationError(msg) from e
        if result < 0:
            msg = f"Write rejected by device (result={result})"
            raise DeviceCommunicationError(msg)
        return result

    def send_feature_report(self, data: bytes) -> int:
        """Send a feature report.

        Raises:
            DeviceCommunicationError: If sending fails or report is rejected.
        """
        device = self._require_device()
        try:
            result: int = device.send_feature_report(data)
        except (OSError, ValueError) as e:
            msg = f"Failed to send feature report: {e}"
            raise DeviceCommunicationError(msg) from e
        if result < 0:
            msg = f"Feature report rejected by device (result={result})"
            raise DeviceCommunicationError(msg)
        return result

    def _require_device(self) -> Any:
        if self._device is None:
            msg = "Device not opened"
            raise DeviceCommunicationError(msg)
        return self._device

    def _read_loop(self) -> None:
        """Poll the handle until closed, forwarding reports and errors."""
        device = self._device
        while not self._stopping.is_set():
            try:
                data = device.read(INPUT_READ_SIZE, READ_POLL_MS)
            except (OSError, ValueError) as e:
                if self._stopping.is_set():
                    break
                logger.debug("Input read failed: %s", e)
                err = DeviceCommunicationError(f"Failed to read report: {e}")
                err.__cause__ = e
                if self._error_callback is not None:
                    self._error_callback(err)
                break
            if data and self._data_callback is not None:
                self._data_callback(bytes(data))

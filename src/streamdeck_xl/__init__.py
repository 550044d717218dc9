"""Stream Deck XL - Drive key displays and read key presses over USB HID.

This package talks directly to an Elgato Stream Deck XL (32 keys, 96x96
pixel display per key) through hidapi.

Example:
    from streamdeck_xl import open_device

    with open_device() as deck:
        deck.on("down", lambda key: print("pressed", key))
        deck.fill_color(0, 255, 0, 0)
        deck.set_brightness(80)
"""

from streamdeck_xl.constants import (
    ICON_SIZE,
    NUM_KEYS,
    PRODUCT_ID,
    VENDOR_ID,
)
from streamdeck_xl.decoder import KeyStateDecoder
from streamdeck_xl.device import (
    StreamDeckXL,
    enumerate_devices,
    find_device_info,
    open_device,
)
from streamdeck_xl.exceptions import (
    DeviceCommunicationError,
    DeviceNotFoundError,
    ErrorKind,
    ImageError,
    InvalidArgumentError,
    MalformedReportError,
    StreamDeckError,
)
from streamdeck_xl.models import DeviceInfo, EventType, KeyEvent

__version__ = "1.0.0"

__all__ = [
    "ICON_SIZE",
    "NUM_KEYS",
    "PRODUCT_ID",
    "VENDOR_ID",
    "DeviceCommunicationError",
    "DeviceInfo",
    "DeviceNotFoundError",
    "ErrorKind",
    "EventType",
    "ImageError",
    "InvalidArgumentError",
    "KeyEvent",
    "KeyStateDecoder",
    "MalformedReportError",
    "StreamDeckError",
    "StreamDeckXL",
    "__version__",
    "enumerate_devices",
    "find_device_info",
    "open_device",
]

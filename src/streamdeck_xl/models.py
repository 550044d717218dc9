"""Data models for streamdeck-xl."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class EventType(Enum):
    """Events emitted by a device session."""

    DOWN = "down"
    UP = "up"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """A single key edge decoded from an input report."""

    type: EventType
    key: int


@dataclass(frozen=True, slots=True)
class DeviceInfo:
    """An attached HID device as reported by enumeration."""

    path: bytes
    vendor_id: int
    product_id: int
    serial_number: str = ""
    product_string: str = ""

    @classmethod
    def from_hid(cls, info: dict[str, Any]) -> "DeviceInfo":
        """Build from a hidapi enumeration dictionary."""
        return cls(
            path=info["path"],
            vendor_id=info["vendor_id"],
            product_id=info["product_id"],
            serial_number=info.get("serial_number") or "",
            product_string=info.get("product_string") or "",
        )

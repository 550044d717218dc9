"""Pytest configuration and fixtures."""

import time
from unittest.mock import MagicMock

import pytest


def _idle_read(size: int, timeout_ms: int = 0) -> list[int]:
    """Stand-in for hid.device.read when no input is pending."""
    time.sleep(0.001)
    return []


@pytest.fixture
def mock_device_info() -> dict:
    """Create mock device info dictionary (hidapi format)."""
    return {
        "vendor_id": 0x0FD9,
        "product_id": 0x006C,
        "interface_number": 0,
        "path": b"/dev/hidraw3",
        "serial_number": "CL12K1A00042",
        "product_string": "Stream Deck XL",
    }


@pytest.fixture
def mock_hid_device() -> MagicMock:
    """Create a mock hid.device object."""
    device = MagicMock()
    device.open_path = MagicMock()
    device.close = MagicMock()
    device.write = MagicMock(return_value=1024)
    device.send_feature_report = MagicMock(return_value=32)
    device.read = MagicMock(side_effect=_idle_read)
    return device

"""Tests for constants module."""

from streamdeck_xl.constants import (
    FEATURE_REPORT_SIZE,
    FRAME_HEADER_SIZE,
    FRAME_PAYLOAD_SIZE,
    FRAME_SIZE,
    HIGHRES_SOURCE_BYTES,
    ICON_BYTES,
    ICON_SIZE,
    LOWRES_SOURCE_BYTES,
    MIN_INPUT_REPORT_SIZE,
    NUM_KEYS,
    PRODUCT_ID,
    VENDOR_ID,
)


def test_hardware_ids() -> None:
    """Vendor and product ID should identify the Stream Deck XL."""
    assert VENDOR_ID == 0x0FD9
    assert PRODUCT_ID == 0x006C


def test_key_count() -> None:
    """Stream Deck XL has 32 keys."""
    assert NUM_KEYS == 32


def test_icon_bytes() -> None:
    """Canonical icon should be 96x96 RGB."""
    assert ICON_SIZE == 96
    assert ICON_BYTES == 96 * 96 * 3


def test_source_lengths() -> None:
    """Accepted source buffers are 27360 and 72x72x3 bytes."""
    assert HIGHRES_SOURCE_BYTES == 27360
    assert LOWRES_SOURCE_BYTES == 15552


def test_frame_layout() -> None:
    """Frames are 1024 bytes with an 8-byte header."""
    assert FRAME_SIZE == 1024
    assert FRAME_HEADER_SIZE == 8
    assert FRAME_PAYLOAD_SIZE == 1016


def test_feature_report_size() -> None:
    """Feature reports are 32 bytes."""
    assert FEATURE_REPORT_SIZE == 32


def test_min_input_report_size() -> None:
    """4 header bytes + 32 key bytes + 1 padding byte."""
    assert MIN_INPUT_REPORT_SIZE == 37

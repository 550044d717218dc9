"""Wire format for streamed key images and feature reports.

Image frame layout (1024 bytes):

    0     report id (0x02)
    1     command (0x07, set key image)
    2     key index
    3     1 on the final frame of an image, else 0
    4-5   payload length, uint16 little-endian
    6-7   sequence number, uint16 little-endian
    8-    payload (up to 1016 bytes), zero padded

Brightness feature report (32 bytes): 0x03 0x08 <percentage> then zeros.
"""

from __future__ import annotations

import struct
from typing import TYPE_CHECKING

from streamdeck_xl.constants import (
    COMMAND_SET_BRIGHTNESS,
    COMMAND_SET_KEY_IMAGE,
    FEATURE_REPORT_SIZE,
    FRAME_PAYLOAD_SIZE,
    NUM_KEYS,
    REPORT_ID_FEATURE,
    REPORT_ID_IMAGE,
)
from streamdeck_xl.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Iterator

_FRAME_HEADER = struct.Struct("<BBBBHH")


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_key_index(key: int) -> None:
    """Raise InvalidArgumentError unless key is an int in 0-31."""
    if not _is_int(key) or not 0 <= key < NUM_KEYS:
        msg = f"Expected a valid key index 0 - {NUM_KEYS - 1}, got {key}"
        raise InvalidArgumentError(msg)


def check_rgb_value(value: int) -> None:
    """Raise InvalidArgumentError unless value is an int color channel 0-255."""
    if not _is_int(value) or not 0 <= value <= 255:
        msg = f"Expected a valid color RGB value 0 - 255, got {value}"
        raise InvalidArgumentError(msg)


def check_brightness(percentage: int) -> None:
    """Raise InvalidArgumentError unless percentage is an int in 0-100."""
    if not _is_int(percentage) or not 0 <= percentage <= 100:
        msg = f"Expected brightness percentage between 0 and 100, got {percentage}"
        raise InvalidArgumentError(msg)


def build_frame(key: int, sequence: int, chunk: bytes, is_last: bool) -> bytes:
    """Build one zero-padded image frame."""
    header = _FRAME_HEADER.pack(
        REPORT_ID_IMAGE,
        COMMAND_SET_KEY_IMAGE,
        key,
        1 if is_last else 0,
        len(chunk),
        sequence,
    )
    return header + bytes(chunk) + bytes(FRAME_PAYLOAD_SIZE - len(chunk))


def iter_frames(payload: bytes, key: int) -> Iterator[bytes]:
    """Split a compressed image into device frames.

    Yields frames with contiguous sequence numbers starting at 0. Only the
    final frame has the last-frame flag set. An empty payload yields
    nothing.
    """
    sequence = 0
    cursor = 0
    remaining = len(payload)
    while remaining > 0:
        chunk_len = min(remaining, FRAME_PAYLOAD_SIZE)
        is_last = remaining <= FRAME_PAYLOAD_SIZE
        yield build_frame(key, sequence, payload[cursor : cursor + chunk_len], is_last)
        cursor += chunk_len
        remaining -= chunk_len
        sequence += 1


def build_brightness_report(percentage: int) -> bytes:
    """Build the 32-byte brightness feature report."""
    check_brightness(percentage)
    report = bytearray(FEATURE_REPORT_SIZE)
    report[0] = REPORT_ID_FEATURE
    report[1] = COMMAND_SET_BRIGHTNESS
    report[2] = percentage
    return bytes(report)

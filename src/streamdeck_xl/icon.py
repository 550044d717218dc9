"""Key icon preparation: raw pixel transforms and JPEG compression.

Every icon the device receives is a 96x96 RGB JPEG. Callers hand in either
a solid color or a raw pixel buffer in one of two layouts:

- HighRes (27360 bytes): read backwards through the buffer, which rotates
  the image by 180 degrees.
- LowRes (72x72x3 = 15552 bytes): nearest-neighbor upscaled to 96x96,
  channels read forwards.

Both are normalised to a canonical 96x96x3 RGB buffer before compression.
"""

import io
import math

from PIL import Image

from streamdeck_xl.constants import (
    HIGHRES_SOURCE_BYTES,
    ICON_BYTES,
    ICON_SIZE,
    JPEG_QUALITY,
    JPEG_SUBSAMPLING,
    LOWRES_SOURCE_BYTES,
    LOWRES_SOURCE_SIZE,
)
from streamdeck_xl.exceptions import ImageError, InvalidArgumentError


def solid_icon(r: int, g: int, b: int) -> bytes:
    """Build a canonical icon filled with a single color."""
    return bytes((r, g, b)) * (ICON_SIZE * ICON_SIZE)


def transform_high_res(source: bytes) -> bytes:
    """Map a 27360-byte HighRes buffer onto the canonical icon.

    The source cursor walks backwards three bytes per destination pixel.
    A 27360-byte buffer runs out before the last destination row; offsets
    before the start of the buffer read as zero.
    """
    if len(source) != HIGHRES_SOURCE_BYTES:
        msg = (
            f"Expected image buffer of length {HIGHRES_SOURCE_BYTES}, "
            f"got length {len(source)}"
        )
        raise InvalidArgumentError(msg)

    pixels = bytearray(ICON_BYTES)
    pos = 0
    cursor = len(source) - 1
    for _y in range(ICON_SIZE - 1, -1, -1):
        for _x in range(ICON_SIZE - 1, -1, -1):
            if cursor >= 2:
                pixels[pos : pos + 3] = source[cursor - 2 : cursor + 1]
            pos += 3
            cursor -= 3
    return bytes(pixels)


def _nearest(coord: int) -> int:
    """Scale a canonical coordinate to the LowRes grid, rounding half up."""
    return math.floor(coord * LOWRES_SOURCE_SIZE / ICON_SIZE + 0.5)


def transform_low_res(source: bytes) -> bytes:
    """Upscale a 72x72 LowRes buffer onto the canonical icon."""
    if len(source) != LOWRES_SOURCE_BYTES:
        msg = (
            f"Expected image buffer of length {LOWRES_SOURCE_BYTES}, "
            f"got length {len(source)}"
        )
        raise InvalidArgumentError(msg)

    pixels = bytearray(ICON_BYTES)
    pos = 0
    for y in range(ICON_SIZE - 1, -1, -1):
        row = _nearest(y) * LOWRES_SOURCE_SIZE
        for x in range(ICON_SIZE - 1, -1, -1):
            ipos = (_nearest(x) + row) * 3
            pixels[pos : pos + 3] = source[ipos : ipos + 3]
            pos += 3
    return bytes(pixels)


def to_canonical_icon(source: bytes) -> bytes:
    """Convert a raw source buffer into a canonical icon.

    Args:
        source: HighRes (27360 bytes) or LowRes (15552 bytes) pixel data.

    Returns:
        96x96x3 RGB bytes.

    Raises:
        InvalidArgumentError: If the buffer has any other length.
    """
    if len(source) == HIGHRES_SOURCE_BYTES:
        return transform_high_res(source)
    if len(source) == LOWRES_SOURCE_BYTES:
        return transform_low_res(source)

    msg = (
        f"Expected image buffer of length {HIGHRES_SOURCE_BYTES} or "
        f"{LOWRES_SOURCE_BYTES}, got length {len(source)}"
    )
    raise InvalidArgumentError(msg)


def compress_icon(pixels: bytes) -> bytes:
    """Compress a canonical icon to the JPEG stream the device expects.

    Raises:
        ImageError: If pixels is not exactly 96x96x3 bytes.
    """
    if len(pixels) != ICON_BYTES:
        msg = f"Icon pixel data must be exactly {ICON_BYTES} bytes, got {len(pixels)}"
        raise ImageError(msg)

    im = Image.frombytes("RGB", (ICON_SIZE, ICON_SIZE), bytes(pixels))
    buffer = io.BytesIO()
    im.save(
        buffer,
        format="JPEG",
        quality=JPEG_QUALITY,
        subsampling=JPEG_SUBSAMPLING,
    )
    return buffer.getvalue()

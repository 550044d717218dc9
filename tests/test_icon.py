"""Tests for icon module."""

import io

import pytest
from PIL import Image

from streamdeck_xl.constants import (
    HIGHRES_SOURCE_BYTES,
    ICON_BYTES,
    ICON_SIZE,
    LOWRES_SOURCE_BYTES,
)
from streamdeck_xl.exceptions import ImageError, InvalidArgumentError
from streamdeck_xl.icon import (
    compress_icon,
    solid_icon,
    to_canonical_icon,
    transform_high_res,
    transform_low_res,
)


def _pixel(icon: bytes, index: int) -> bytes:
    return icon[index * 3 : index * 3 + 3]


class TestSolidIcon:
    """Tests for solid_icon function."""

    def test_every_pixel_matches(self) -> None:
        """Icon should be 96x96 identical triplets."""
        icon = solid_icon(12, 34, 56)
        assert len(icon) == ICON_BYTES
        assert all(
            _pixel(icon, i) == bytes([12, 34, 56]) for i in range(ICON_SIZE * ICON_SIZE)
        )

    def test_black(self) -> None:
        """Black icon should be all zeros."""
        assert solid_icon(0, 0, 0) == bytes(ICON_BYTES)


class TestHighRes:
    """Tests for the 27360-byte source transform."""

    def test_single_pixel_is_rotated(self) -> None:
        """Source pixel p should land at destination pixel 9119 - p."""
        source = bytearray(HIGHRES_SOURCE_BYTES)
        source[30:33] = bytes([200, 100, 50])  # source pixel 10

        icon = transform_high_res(bytes(source))

        assert _pixel(icon, 9109) == bytes([200, 100, 50])
        assert icon.count(0) == ICON_BYTES - 3

    def test_last_source_pixel_is_first(self) -> None:
        """The final source triplet becomes the top-left destination pixel."""
        source = bytearray(HIGHRES_SOURCE_BYTES)
        source[-3:] = bytes([1, 2, 3])

        icon = transform_high_res(bytes(source))

        assert _pixel(icon, 0) == bytes([1, 2, 3])

    def test_final_row_reads_past_start_as_zero(self) -> None:
        """Destination pixels beyond the source buffer should be black."""
        icon = transform_high_res(b"\xff" * HIGHRES_SOURCE_BYTES)

        assert icon[: 9120 * 3] == b"\xff" * (9120 * 3)
        assert icon[9120 * 3 :] == bytes(96 * 3)

    def test_wrong_length_rejected(self) -> None:
        """Only 27360 bytes should be accepted."""
        with pytest.raises(InvalidArgumentError, match="27360"):
            transform_high_res(bytes(ICON_BYTES))


class TestLowRes:
    """Tests for the 72x72 source transform."""

    def test_top_left_source_pixel(self) -> None:
        """Source (0, 0) should only reach the last destination pixel."""
        source = bytearray(LOWRES_SOURCE_BYTES)
        source[0:3] = bytes([10, 20, 30])

        icon = transform_low_res(bytes(source))

        assert _pixel(icon, ICON_SIZE * ICON_SIZE - 1) == bytes([10, 20, 30])
        assert icon.count(0) == ICON_BYTES - 3

    def test_bottom_right_source_pixel_rounds_half_up(self) -> None:
        """Source (71, 71) should cover canonical x, y in {94, 95}."""
        source = bytearray(LOWRES_SOURCE_BYTES)
        offset = (71 + 71 * 72) * 3
        source[offset : offset + 3] = bytes([10, 20, 30])

        icon = transform_low_res(bytes(source))

        for index in (0, 1, 96, 97):
            assert _pixel(icon, index) == bytes([10, 20, 30])
        assert icon.count(0) == ICON_BYTES - 4 * 3

    def test_channels_not_reordered(self) -> None:
        """A uniform source should stay the same color."""
        icon = transform_low_res(bytes([1, 2, 3]) * (72 * 72))
        assert icon == solid_icon(1, 2, 3)

    def test_wrong_length_rejected(self) -> None:
        """Only 15552 bytes should be accepted."""
        with pytest.raises(InvalidArgumentError, match="15552"):
            transform_low_res(bytes(100))


class TestToCanonicalIcon:
    """Tests for to_canonical_icon dispatch."""

    def test_dispatches_high_res(self) -> None:
        """27360-byte buffers should use the HighRes transform."""
        source = bytes(range(256)) * 106 + bytes(224)
        assert to_canonical_icon(source) == transform_high_res(source)

    def test_dispatches_low_res(self) -> None:
        """15552-byte buffers should use the LowRes transform."""
        source = bytes(range(256)) * 60 + bytes(192)
        assert to_canonical_icon(source) == transform_low_res(source)

    @pytest.mark.parametrize("length", [0, 15551, 27359, ICON_BYTES])
    def test_other_lengths_rejected(self, length: int) -> None:
        """Error message should state both accepted lengths."""
        with pytest.raises(InvalidArgumentError, match="27360 or 15552"):
            to_canonical_icon(bytes(length))


class TestCompressIcon:
    """Tests for compress_icon function."""

    def test_produces_96px_jpeg(self) -> None:
        """Output should decode as a 96x96 JPEG of roughly the same color."""
        data = compress_icon(solid_icon(255, 0, 0))

        with Image.open(io.BytesIO(data)) as im:
            assert im.format == "JPEG"
            assert im.size == (ICON_SIZE, ICON_SIZE)
            r, g, b = im.convert("RGB").getpixel((48, 48))
        assert r > 240
        assert g < 20
        assert b < 20

    def test_deterministic(self) -> None:
        """Same pixels should compress to identical bytes."""
        assert compress_icon(solid_icon(0, 0, 0)) == compress_icon(bytes(ICON_BYTES))

    def test_wrong_length_rejected(self) -> None:
        """Buffers that are not 96x96x3 should raise ImageError."""
        with pytest.raises(ImageError, match="27648"):
            compress_icon(bytes(100))

"""Constants for Stream Deck XL communication."""

from typing import Final

# Elgato USB Vendor ID
VENDOR_ID: Final[int] = 0x0FD9

# Stream Deck XL Product ID
PRODUCT_ID: Final[int] = 0x006C

# Key layout (4 rows x 8 columns)
NUM_KEYS: Final[int] = 32

# Icon geometry
ICON_SIZE: Final[int] = 96
ICON_BYTES: Final[int] = ICON_SIZE * ICON_SIZE * 3  # 27648 bytes

# Accepted raw source buffer lengths
HIGHRES_SOURCE_BYTES: Final[int] = 27360
LOWRES_SOURCE_SIZE: Final[int] = 72
LOWRES_SOURCE_BYTES: Final[int] = LOWRES_SOURCE_SIZE * LOWRES_SOURCE_SIZE * 3  # 15552

# JPEG encoder settings expected by the device
JPEG_QUALITY: Final[int] = 95
JPEG_SUBSAMPLING: Final[str] = "4:2:0"

# Streamed image frames
REPORT_ID_IMAGE: Final[int] = 0x02
COMMAND_SET_KEY_IMAGE: Final[int] = 0x07
FRAME_SIZE: Final[int] = 1024
FRAME_HEADER_SIZE: Final[int] = 8
FRAME_PAYLOAD_SIZE: Final[int] = FRAME_SIZE - FRAME_HEADER_SIZE  # 1016 bytes

# Brightness feature report
REPORT_ID_FEATURE: Final[int] = 0x03
COMMAND_SET_BRIGHTNESS: Final[int] = 0x08
FEATURE_REPORT_SIZE: Final[int] = 32

# Input reports: 4 metadata bytes, 32 key status bytes, 1 padding byte
INPUT_HEADER_SIZE: Final[int] = 4
INPUT_TRAILER_SIZE: Final[int] = 1
MIN_INPUT_REPORT_SIZE: Final[int] = INPUT_HEADER_SIZE + NUM_KEYS + INPUT_TRAILER_SIZE
INPUT_READ_SIZE: Final[int] = 512

# Reader poll interval; only bounds how long shutdown waits for the reader
READ_POLL_MS: Final[int] = 100

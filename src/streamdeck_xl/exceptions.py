"""Custom exceptions for Stream Deck XL."""

from enum import Enum


class ErrorKind(Enum):
    """Category of a driver failure."""

    UNKNOWN = "unknown"
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    TRANSPORT = "transport"
    MALFORMED_REPORT = "malformed_report"


class StreamDeckError(Exception):
    """Base exception for Stream Deck XL errors."""

    kind: ErrorKind = ErrorKind.UNKNOWN


class InvalidArgumentError(StreamDeckError, ValueError):
    """Raised when a key index, color, brightness or buffer is out of range.

    Always raised before anything is sent to the device.
    """

    kind = ErrorKind.INVALID_ARGUMENT


class DeviceNotFoundError(StreamDeckError):
    """Raised when no Stream Deck XL is connected."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "No Stream Deck XL is connected") -> None:
        super().__init__(message)


class DeviceCommunicationError(StreamDeckError):
    """Raised when communication with the device fails."""

    kind = ErrorKind.TRANSPORT


class MalformedReportError(StreamDeckError):
    """Raised when an input report is too short to carry all key states."""

    kind = ErrorKind.MALFORMED_REPORT


class ImageError(InvalidArgumentError):
    """Raised when a pixel buffer cannot be compressed."""

"""Exceptions raised by the MediaBox client."""

from __future__ import annotations

from typing import Optional

NO_CONNECTION_CODE = 0x00
NO_CONNECTION_MESSAGE = "No connection to MediaBox."


class MediaBoxError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(MediaBoxError, TypeError):
    """Invalid constructor arguments; raised synchronously."""


class ConnectionStateError(MediaBoxError):
    """An operation needed an open stream and there was none."""

    def __init__(self, message: str = NO_CONNECTION_MESSAGE, *, code: int = NO_CONNECTION_CODE) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class ConnectionClosedError(ConnectionStateError):
    """The stream went away while an operation was still pending."""

    def __init__(self, message: str = "MediaBox connection closed.") -> None:
        super().__init__(message)


class HandshakeTimeoutError(MediaBoxError, TimeoutError):
    """The device did not finish its handshake in time."""

    def __init__(self, timeout_s: float, events_received: int) -> None:
        super().__init__(
            f"MediaBox handshake not complete after {timeout_s:g}s ({events_received}/4 events)"
        )
        self.timeout_s = timeout_s
        self.events_received = events_received


class ButtonNotFoundError(MediaBoxError, LookupError):
    """The requested button name is not in the lookup table."""

    def __init__(self, name: str) -> None:
        super().__init__(f"'{name}' is not a button name.")
        self.name = name


class InvalidButtonCodeError(MediaBoxError, ValueError):
    """Rejected hex input (only raised when strict codes are enabled)."""

    def __init__(self, value: object, reason: Optional[str] = None) -> None:
        msg = f"invalid hex data {value!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.value = value


class FrameDecodeError(MediaBoxError, ValueError):
    """Bytes that do not form a key frame."""

"""
Key event frames for the MediaBox remote protocol.

Layout (MediaBox <- client):
  byte 0     0x04         key event class
  byte 1     0x01 | 0x00  key down | key up
  bytes 2-5  0x00000000   reserved
  bytes 6-   button code  (six bytes for every known key)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .errors import FrameDecodeError
from .validation import decode_hex_lenient

KEY_EVENT_CLASS = 0x04
RESERVED = b"\x00\x00\x00\x00"
HEADER_LEN = 2 + len(RESERVED)


class KeyState(IntEnum):
    UP = 0x00
    DOWN = 0x01


@dataclass(frozen=True)
class KeyFrame:
    state: KeyState
    code: bytes

    @property
    def code_hex(self) -> str:
        return self.code.hex()


@dataclass(frozen=True)
class TapFrames:
    """Prebuilt bytes for one instantaneous tap (down immediately followed by up)."""
    down: bytes
    up: bytes


def header(state: KeyState) -> bytes:
    return bytes((KEY_EVENT_CLASS, int(state))) + RESERVED


def encode_key_frame(code: str, state: KeyState) -> bytes:
    """Build a key frame; ``code`` is appended as-is after hex decoding."""
    return header(state) + decode_hex_lenient(code)


def key_tap_frames(code: str) -> TapFrames:
    return TapFrames(
        down=encode_key_frame(code, KeyState.DOWN),
        up=encode_key_frame(code, KeyState.UP),
    )


def decode_key_frame(data: bytes) -> KeyFrame:
    if len(data) < HEADER_LEN:
        raise FrameDecodeError(f"key frame too short: {len(data)} bytes")
    if data[0] != KEY_EVENT_CLASS:
        raise FrameDecodeError(f"not a key event frame (class 0x{data[0]:02X})")
    try:
        state = KeyState(data[1])
    except ValueError:
        raise FrameDecodeError(f"unknown key state 0x{data[1]:02X}") from None
    if data[2:HEADER_LEN] != RESERVED:
        raise FrameDecodeError("reserved bytes are not zero")
    return KeyFrame(state=state, code=bytes(data[HEADER_LEN:]))

"""Shared validation helpers for user-provided inputs."""

from __future__ import annotations

import logging
import string
from typing import Optional

from .errors import InvalidButtonCodeError

logger = logging.getLogger(__name__)

BUTTON_CODE_BYTES = 6
_HEX_DIGITS = frozenset(string.hexdigits)


def _ctx(context: str) -> str:
    return f" ({context})" if context else ""


def parse_seconds(
    value: object,
    *,
    default: Optional[float] = None,
    min: float = 0.0,
    max: float = 3600.0,
    log: logging.Logger = logger,
    context: str = "",
) -> Optional[float]:
    """Parse a permissive seconds value; ``0``/``none`` mean "no limit"."""
    if value is None:
        return default
    if isinstance(value, str):
        text = value.strip().lower()
        if text == "":
            return default
        if text in {"none", "off"}:
            return None
        value = text

    try:
        parsed = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        log.warning("Invalid seconds value%s: %r (using default=%s)", _ctx(context), value, default)
        return default

    if parsed == 0:
        return None
    if parsed < min or parsed > max:
        log.warning(
            "Out-of-range seconds value%s: %r (expected %s..%s, using default=%s)",
            _ctx(context),
            parsed,
            min,
            max,
            default,
        )
        return default

    return parsed


def parse_port(
    value: object,
    *,
    default: int,
    log: logging.Logger = logger,
    context: str = "",
) -> int:
    """Parse a TCP port from an env string, falling back to ``default``."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        parsed = int(str(value).strip(), 10)
    except ValueError:
        log.warning("Invalid port%s: %r (using default=%s)", _ctx(context), value, default)
        return default
    if not 0 < parsed <= 0xFFFF:
        log.warning("Out-of-range port%s: %r (using default=%s)", _ctx(context), parsed, default)
        return default
    return parsed


def parse_flag(value: object, *, default: bool = False) -> bool:
    if value is None:
        return default
    text = str(value).strip().lower()
    if not text:
        return default
    return text in {"1", "true", "yes", "on"}


def is_hex(text: str) -> bool:
    return bool(text) and all(ch in _HEX_DIGITS for ch in text)


def check_hex_data(value: object) -> str:
    """Strict check for raw hex payloads: non-empty, even length, hex digits only."""
    if not isinstance(value, str):
        raise InvalidButtonCodeError(value, "expected a hex string")
    if not is_hex(value):
        raise InvalidButtonCodeError(value, "not a hex string")
    if len(value) % 2:
        raise InvalidButtonCodeError(value, "odd number of hex digits")
    return value


def check_button_code(value: object) -> str:
    """Strict check for a button code: exactly six bytes of hex."""
    code = check_hex_data(value)
    if len(code) != BUTTON_CODE_BYTES * 2:
        raise InvalidButtonCodeError(value, f"expected {BUTTON_CODE_BYTES * 2} hex digits, got {len(code)}")
    return code


def decode_hex_lenient(text: str) -> bytes:
    """
    Decode hex the permissive way: pairs are consumed left to right and decoding
    stops at the first pair that is not valid hex. A trailing odd digit is dropped.
    """
    out = bytearray()
    for i in range(0, len(text) - 1, 2):
        pair = text[i:i + 2]
        if pair[0] not in _HEX_DIGITS or pair[1] not in _HEX_DIGITS:
            break
        out.append(int(pair, 16))
    return bytes(out)

"""Endpoint/option validation and environment-driven settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .buttons import ButtonTable
from .errors import ConfigurationError
from .validation import parse_flag, parse_port, parse_seconds

logger = logging.getLogger(__name__)

DEFAULT_PORT = 5900
DEFAULT_CONNECT_TIMEOUT_S = 10.0

_KNOWN_OPTIONS = frozenset({"port", "connect_timeout", "strict_codes"})


@dataclass(frozen=True)
class Endpoint:
    address: str
    port: int = DEFAULT_PORT

    def __post_init__(self) -> None:
        if not isinstance(self.address, str) or not self.address.strip():
            raise ConfigurationError("'address' must be a non-empty string.")
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise ConfigurationError("'port' is not a number.")
        if not 0 < self.port <= 0xFFFF:
            raise ConfigurationError(f"'port' out of range: {self.port}")

    def __str__(self) -> str:
        return f"{self.address}:{self.port}"


@dataclass(frozen=True)
class ClientOptions:
    port: int = DEFAULT_PORT
    connect_timeout: Optional[float] = DEFAULT_CONNECT_TIMEOUT_S
    strict_codes: bool = False

    @staticmethod
    def parse(options: Optional[Mapping[str, Any]]) -> "ClientOptions":
        """Validate the optional constructor mapping; raise ConfigurationError on bad input."""
        if options is None:
            return ClientOptions()
        if not isinstance(options, Mapping):
            raise ConfigurationError("'options' is not an object.")

        unknown = sorted(set(options) - _KNOWN_OPTIONS)
        if unknown:
            logger.warning("ignoring unknown MediaBox options: %s", ", ".join(map(str, unknown)))

        port = options.get("port") or DEFAULT_PORT
        if isinstance(port, bool) or not isinstance(port, int):
            raise ConfigurationError("'port' is not a number.")

        timeout = options.get("connect_timeout", DEFAULT_CONNECT_TIMEOUT_S)
        if timeout is not None:
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
                raise ConfigurationError("'connect_timeout' is not a number.")
            if timeout <= 0:
                raise ConfigurationError("'connect_timeout' must be positive (or None to wait forever).")
            timeout = float(timeout)

        strict = options.get("strict_codes", False)
        if not isinstance(strict, bool):
            raise ConfigurationError("'strict_codes' is not a boolean.")

        return ClientOptions(port=port, connect_timeout=timeout, strict_codes=strict)

    def as_dict(self) -> dict:
        return {
            "port": self.port,
            "connect_timeout": self.connect_timeout,
            "strict_codes": self.strict_codes,
        }


@dataclass(frozen=True)
class Config:
    # MediaBox
    host: str
    port: int
    connect_timeout_s: Optional[float]
    strict_codes: bool
    buttons_file: str

    # Health endpoint
    health_host: str
    health_port: int

    @staticmethod
    def load() -> "Config":
        """Build a Config from environment."""
        host = os.getenv("MEDIABOX_HOST", "127.0.0.1").strip() or "127.0.0.1"
        port = parse_port(os.getenv("MEDIABOX_PORT"), default=DEFAULT_PORT, context="MEDIABOX_PORT")
        connect_timeout_s = parse_seconds(
            os.getenv("MEDIABOX_CONNECT_TIMEOUT"),
            default=DEFAULT_CONNECT_TIMEOUT_S,
            context="MEDIABOX_CONNECT_TIMEOUT",
        )
        strict_codes = parse_flag(os.getenv("MEDIABOX_STRICT_CODES"))
        buttons_file = (os.getenv("MEDIABOX_BUTTONS_FILE") or "").strip()

        health_host = os.getenv("HEALTH_HOST", "0.0.0.0")
        health_port = parse_port(os.getenv("HEALTH_PORT"), default=9123, context="HEALTH_PORT")

        return Config(
            host=host,
            port=port,
            connect_timeout_s=connect_timeout_s,
            strict_codes=strict_codes,
            buttons_file=buttons_file,
            health_host=health_host,
            health_port=health_port,
        )

    def client_options(self) -> dict:
        return {
            "port": self.port,
            "connect_timeout": self.connect_timeout_s,
            "strict_codes": self.strict_codes,
        }

    def load_buttons(self) -> ButtonTable:
        """Return the configured button table, or an empty one when no file is set."""
        if not self.buttons_file:
            return ButtonTable()
        try:
            return ButtonTable.load(self.buttons_file)
        except FileNotFoundError as exc:
            raise RuntimeError(f"button table not found: {self.buttons_file}") from exc

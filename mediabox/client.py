# Copyright (c) 2025 MediaBox Remote
# SPDX-License-Identifier: MIT

"""
MediaBox - remote control client for the set-top box over raw TCP (default port 5900).

Lifecycle:
- connect(): open the stream, run the four-event handshake, resolve once the box is ready
- press_button()/press_button_by_code(): key-down frame immediately followed by key-up frame
- send_raw(): one caller-supplied frame, no header
- disconnect(): abort the stream (the protocol has no goodbye frame)

Writes and connect are serialised on one lock; the protocol has no request ids,
so overlapping writes or handshakes would corrupt the sequence.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from .buttons import ButtonLookup, ButtonTable
from .config import ClientOptions, Config, Endpoint
from .errors import (
    ButtonNotFoundError,
    ConnectionClosedError,
    ConnectionStateError,
    HandshakeTimeoutError,
    InvalidButtonCodeError,
)
from .frames import key_tap_frames
from .handshake import HandshakeMachine
from .transport import TcpStream
from .validation import check_button_code, check_hex_data, decode_hex_lenient

logger = logging.getLogger(__name__)

StreamFactory = Callable[..., Any]


class ConnectionState(str, Enum):
    ABSENT = "absent"
    CONNECTING = "connecting"
    OPEN = "open"


class MediaBox:
    """Client for a single MediaBox; owns at most one live stream."""

    def __init__(
        self,
        address: str,
        options: Optional[Mapping[str, Any]] = None,
        *,
        buttons: Optional[ButtonLookup] = None,
        stream_factory: StreamFactory = TcpStream,
    ) -> None:
        self._options = ClientOptions.parse(options)
        self._endpoint = Endpoint(address, self._options.port)
        self._buttons: ButtonLookup = buttons if buttons is not None else ButtonTable()
        self._stream_factory = stream_factory

        self._stream: Optional[Any] = None
        self._handshake: Optional[HandshakeMachine] = None
        self._pending: Optional[asyncio.Future] = None
        self._state = ConnectionState.ABSENT
        self._connecting = False
        self._lock = asyncio.Lock()

        self._frames_sent = 0

    @classmethod
    def from_config(cls, cfg: Config, *, buttons: Optional[ButtonLookup] = None) -> "MediaBox":
        if buttons is None:
            buttons = cfg.load_buttons()
        return cls(cfg.host, cfg.client_options(), buttons=buttons)

    @property
    def endpoint(self) -> Endpoint:
        return self._endpoint

    @property
    def options(self) -> ClientOptions:
        return self._options

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is ConnectionState.OPEN

    @property
    def remote_version(self) -> Optional[bytes]:
        """Version bytes the box sent first; kept for diagnostics only."""
        hs = self._handshake
        return hs.remote_version if hs is not None else None

    @property
    def status(self) -> dict:
        hs = self._handshake
        return {
            "address": self._endpoint.address,
            "port": self._endpoint.port,
            "state": self._state.value,
            "connected": self.is_connected,
            "handshake_stage": hs.stage.value if hs is not None else None,
            "handshake_events": hs.events_received if hs is not None else 0,
            "remote_version": hs.remote_version.hex() if hs is not None and hs.remote_version is not None else None,
            "frames_sent": self._frames_sent,
            "strict_codes": self._options.strict_codes,
        }

    # ---------- connection manager ----------

    async def connect(self) -> None:
        """Open the stream and return once the handshake has completed."""
        if self._connecting:
            raise ConnectionStateError("MediaBox connect already in progress.")

        self._connecting = True
        try:
            await self._connect_locked()
        finally:
            self._connecting = False

        logger.info(
            "mediabox %s connected (version=%s)",
            self._endpoint,
            self.remote_version.hex() if self.remote_version is not None else "?",
        )

    async def _connect_locked(self) -> None:
        async with self._lock:
            if self._stream is not None:
                logger.info("mediabox %s: reconnecting, dropping previous stream", self._endpoint)
                self._teardown(self._stream)

            loop = asyncio.get_running_loop()
            pending = loop.create_future()
            handshake = HandshakeMachine()

            def _on_data(data: bytes) -> None:
                self._handle_data(stream, data)

            def _on_close() -> None:
                self._handle_close(stream)

            stream = self._stream_factory(on_data=_on_data, on_close=_on_close)
            self._stream = stream
            self._handshake = handshake
            self._pending = pending
            self._state = ConnectionState.CONNECTING

            # One deadline covers the TCP open and the four handshake events.
            timeout = self._options.connect_timeout
            try:
                await asyncio.wait_for(self._open_and_handshake(stream, pending), timeout=timeout)
            except asyncio.TimeoutError:
                events = handshake.events_received
                self._teardown(stream)
                logger.warning(
                    "mediabox %s: connect timed out after %ss (%d/4 handshake events)",
                    self._endpoint, timeout, events,
                )
                raise HandshakeTimeoutError(timeout or 0.0, events) from None
            except BaseException:
                self._teardown(stream)
                raise
            finally:
                if self._pending is pending:
                    self._pending = None

    async def _open_and_handshake(self, stream: Any, pending: asyncio.Future) -> None:
        await stream.open(self._endpoint.address, self._endpoint.port)
        logger.debug("mediabox %s: socket open, awaiting handshake", self._endpoint)
        await pending

    async def disconnect(self) -> None:
        """Abort the open stream; fails if there is none."""
        stream = self._require_stream()
        self._teardown(stream)
        self._fail_pending(ConnectionClosedError("MediaBox connection closed by disconnect()."))
        logger.info("mediabox %s disconnected", self._endpoint)

    # ---------- command encoder ----------

    async def press_button(self, name: str) -> None:
        """Tap the button called ``name`` in the lookup table."""
        self._require_stream()
        code = self._buttons.find_by_name(name)
        if code is None:
            raise ButtonNotFoundError(name)
        await self._tap(code, label=name)

    async def press_button_by_code(self, code: str) -> None:
        """Tap a raw button code, bypassing the lookup table."""
        self._require_stream()
        await self._tap(code, label=code)

    async def send_raw(self, hex_data: str) -> None:
        """Write ``hex_data`` decoded as a single frame, no header added."""
        self._require_stream()
        if self._options.strict_codes:
            check_hex_data(hex_data)
        payload = self._decode(hex_data)
        async with self._lock:
            stream = self._require_stream()
            stream.write(payload)
            await stream.drain()
            self._frames_sent += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("raw frame %s", payload.hex())

    # ---------- internals ----------

    async def _tap(self, code: str, *, label: str) -> None:
        if self._options.strict_codes:
            check_button_code(code)
        elif not isinstance(code, str):
            raise InvalidButtonCodeError(code, "expected a hex string")
        frames = key_tap_frames(code)
        async with self._lock:
            stream = self._require_stream()
            stream.write(frames.down)
            stream.write(frames.up)
            await stream.drain()
            self._frames_sent += 2
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("button %s down=%s up=%s", label, frames.down.hex(), frames.up.hex())

    @staticmethod
    def _decode(hex_data: str) -> bytes:
        if not isinstance(hex_data, str):
            raise InvalidButtonCodeError(hex_data, "expected a hex string")
        return decode_hex_lenient(hex_data)

    def _require_stream(self) -> Any:
        stream = self._stream
        if stream is None:
            raise ConnectionStateError()
        return stream

    def _handle_data(self, stream: Any, data: bytes) -> None:
        if stream is not self._stream or self._handshake is None:
            return
        step = self._handshake.data_received(data)
        if step.reply is not None:
            stream.write(step.reply)
        if step.completed:
            self._state = ConnectionState.OPEN
            pending = self._pending
            if pending is not None and not pending.done():
                pending.set_result(None)

    def _handle_close(self, stream: Any) -> None:
        if stream is not self._stream:
            return
        logger.warning("mediabox %s closed the connection (state=%s)", self._endpoint, self._state.value)
        self._stream = None
        self._state = ConnectionState.ABSENT
        self._fail_pending(ConnectionClosedError())

    def _teardown(self, stream: Any) -> None:
        if self._stream is stream:
            self._stream = None
            self._state = ConnectionState.ABSENT
        stream.abort()

    def _fail_pending(self, exc: BaseException) -> None:
        pending = self._pending
        if pending is not None and not pending.done():
            pending.set_exception(exc)

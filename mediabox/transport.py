"""TCP byte stream to the MediaBox with data/close callbacks."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

OnData = Callable[[bytes], None]
OnClose = Callable[[], None]

log = logging.getLogger(__name__)

READ_CHUNK = 4096


class TcpStream:
    """
    One TCP connection driven by a background reader task.

    Every chunk returned by a socket read is delivered to ``on_data`` as one
    data event. ``on_close`` fires once when the peer closes the connection or
    the read fails; a local ``abort()`` does not fire it.
    """

    def __init__(self, *, on_data: OnData, on_close: OnClose, read_size: int = READ_CHUNK) -> None:
        self._on_data = on_data
        self._on_close = on_close
        self._read_size = read_size

        self._reader: Optional[asyncio.StreamReader] = None
        self._writer: Optional[asyncio.StreamWriter] = None
        self._reader_task: Optional[asyncio.Task] = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self._writer is not None and not self._closed

    async def open(self, host: str, port: int) -> None:
        if self._writer is not None:
            raise RuntimeError("stream already opened")
        self._reader, self._writer = await asyncio.open_connection(host, port)
        log.debug("tcp stream open to %s:%d", host, port)
        self._reader_task = asyncio.create_task(self._reader_loop(), name=f"mediabox-reader-{host}:{port}")

    def write(self, data: bytes) -> None:
        if not self.is_open:
            raise ConnectionResetError("stream is closed")
        self._writer.write(data)  # type: ignore[union-attr]

    async def drain(self) -> None:
        if self.is_open:
            await self._writer.drain()  # type: ignore[union-attr]

    def abort(self) -> None:
        """Tear the connection down immediately, without a graceful shutdown."""
        self._closed = True
        task, self._reader_task = self._reader_task, None
        if task is not None and task is not asyncio.current_task():
            task.cancel()
        writer, self._writer = self._writer, None
        if writer is not None:
            writer.transport.abort()

    async def _reader_loop(self) -> None:
        assert self._reader is not None
        try:
            while True:
                chunk = await self._reader.read(self._read_size)
                if not chunk:
                    log.debug("tcp stream eof")
                    break
                self._emit_data(chunk)
        except asyncio.CancelledError:
            raise
        except (ConnectionError, OSError) as e:
            log.warning("mediabox stream read failed: %r", e)

        if not self._closed:
            self._closed = True
            writer, self._writer = self._writer, None
            if writer is not None:
                writer.transport.abort()
            self._emit_close()

    def _emit_data(self, chunk: bytes) -> None:
        try:
            self._on_data(chunk)
        except Exception:
            log.exception("on_data handler failed")

    def _emit_close(self) -> None:
        try:
            self._on_close()
        except Exception:
            log.exception("on_close handler failed")

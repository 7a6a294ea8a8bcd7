"""In-memory stand-in for the TCP stream, driven by the test as if it were the box."""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional, Tuple


class FakeStream:
    def __init__(self, *, on_data: Callable[[bytes], None], on_close: Callable[[], None]) -> None:
        self._on_data = on_data
        self._on_close = on_close
        self.opened_to: Optional[Tuple[str, int]] = None
        self.writes: List[bytes] = []
        self.aborted = False
        self.open_error: Optional[BaseException] = None
        self.open_delay = 0.0

    async def open(self, host: str, port: int) -> None:
        if self.open_delay:
            await asyncio.sleep(self.open_delay)
        if self.open_error is not None:
            raise self.open_error
        self.opened_to = (host, port)

    def write(self, data: bytes) -> None:
        if self.aborted:
            raise ConnectionResetError("stream is closed")
        self.writes.append(bytes(data))

    async def drain(self) -> None:
        return None

    def abort(self) -> None:
        self.aborted = True

    # box side
    def feed(self, data: bytes) -> None:
        self._on_data(data)

    def peer_close(self) -> None:
        self._on_close()


class FakeStreamFactory:
    def __init__(self, open_error: Optional[BaseException] = None, open_delay: float = 0.0) -> None:
        self.streams: List[FakeStream] = []
        self._open_error = open_error
        self._open_delay = open_delay

    def __call__(self, *, on_data, on_close) -> FakeStream:
        stream = FakeStream(on_data=on_data, on_close=on_close)
        stream.open_error = self._open_error
        stream.open_delay = self._open_delay
        self.streams.append(stream)
        return stream

    @property
    def last(self) -> FakeStream:
        return self.streams[-1]


HANDSHAKE = (b"MBX 1.4.2\n", b"\x01\x02", b"\x00", b"\x00\x00\x00\x01")


async def settle(rounds: int = 5) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0)


async def connect_with_handshake(box, factory: FakeStreamFactory) -> FakeStream:
    """Start box.connect(), play the four handshake payloads and wait for it."""
    task = asyncio.create_task(box.connect())
    await settle()
    stream = factory.last
    for payload in HANDSHAKE:
        stream.feed(payload)
    await task
    return stream

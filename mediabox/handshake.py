"""
Connection handshake for the MediaBox.

The box drives the exchange; the client only counts data events:
  event 0: box sends its version; client echoes the identical bytes back
  event 1: consumed, ignored
  event 2: consumed, ignored
  event 3: handshake complete, commands may be sent
Anything later is ignored. Payload content is never inspected beyond event 0.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class HandshakeStage(str, Enum):
    AWAITING_VERSION = "AwaitingVersion"
    AWAITING_FILLER_1 = "AwaitingFiller1"
    AWAITING_FILLER_2 = "AwaitingFiller2"
    AWAITING_FINAL = "AwaitingFinal"
    READY = "Ready"


_NEXT_STAGE = {
    HandshakeStage.AWAITING_VERSION: HandshakeStage.AWAITING_FILLER_1,
    HandshakeStage.AWAITING_FILLER_1: HandshakeStage.AWAITING_FILLER_2,
    HandshakeStage.AWAITING_FILLER_2: HandshakeStage.AWAITING_FINAL,
    HandshakeStage.AWAITING_FINAL: HandshakeStage.READY,
    HandshakeStage.READY: HandshakeStage.READY,
}


@dataclass(frozen=True)
class HandshakeStep:
    """Outcome of one data event."""
    stage: HandshakeStage
    reply: Optional[bytes] = None
    completed: bool = False


class HandshakeMachine:
    """Positional handshake state; feed it every inbound data event."""

    def __init__(self) -> None:
        self._stage = HandshakeStage.AWAITING_VERSION
        self._events = 0
        self._remote_version: Optional[bytes] = None

    @property
    def stage(self) -> HandshakeStage:
        return self._stage

    @property
    def events_received(self) -> int:
        return self._events

    @property
    def remote_version(self) -> Optional[bytes]:
        return self._remote_version

    @property
    def is_ready(self) -> bool:
        return self._stage is HandshakeStage.READY

    def data_received(self, payload: bytes) -> HandshakeStep:
        current = self._stage
        self._events += 1
        self._stage = _NEXT_STAGE[current]

        if current is HandshakeStage.AWAITING_VERSION:
            self._remote_version = bytes(payload)
            logger.debug("mediabox version %s (echoing back)", self._remote_version.hex())
            return HandshakeStep(stage=self._stage, reply=self._remote_version)

        if current is HandshakeStage.AWAITING_FINAL:
            logger.debug("mediabox handshake complete after %d events", self._events)
            return HandshakeStep(stage=self._stage, completed=True)

        return HandshakeStep(stage=self._stage)

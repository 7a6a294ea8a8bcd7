"""Lightweight HTTP status endpoint for external monitoring."""

from __future__ import annotations

import asyncio
import contextlib
from typing import Optional

from aiohttp import web

from .client import MediaBox


class HealthServer:
    """Expose the MediaBox connection snapshot as JSON on ``GET /health``."""

    def __init__(self, *, host: str, port: int, box: MediaBox) -> None:
        self._host = host
        self._port = port
        self._box = box

        self._runner: Optional[web.AppRunner] = None
        self._site: Optional[web.TCPSite] = None

    def make_app(self) -> web.Application:
        app = web.Application()
        app.add_routes([web.get("/health", self._handle_health)])
        return app

    async def start(self) -> None:
        if self._runner is not None:
            return

        self._runner = web.AppRunner(self.make_app(), access_log=None)
        await self._runner.setup()
        self._site = web.TCPSite(self._runner, self._host, self._port)
        await self._site.start()

    async def stop(self) -> None:
        runner, self._runner = self._runner, None
        self._site = None
        if runner is None:
            return
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await runner.cleanup()

    async def _handle_health(self, _: web.Request) -> web.Response:
        snapshot = self.snapshot()
        status = 200 if snapshot["status"] == "ok" else 503
        return web.json_response(snapshot, status=status)

    def snapshot(self) -> dict:
        box = self._box.status

        degraded_reasons = []
        if box["state"] == "absent":
            degraded_reasons.append("mediabox.not_connected")
        elif box["state"] == "connecting":
            degraded_reasons.append("mediabox.handshake_pending")

        return {
            "status": "ok" if not degraded_reasons else "degraded",
            "degraded_reasons": degraded_reasons,
            "mediabox": box,
        }

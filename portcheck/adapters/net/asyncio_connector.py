# /portcheck/adapters/net/asyncio_connector.py
from __future__ import annotations

import asyncio
import logging

LOG = logging.getLogger("adapter.tcp_connector")


class StreamConnection:
    def __init__(self, writer: asyncio.StreamWriter) -> None:
        self._writer = writer

    async def close(self) -> None:
        self._writer.close()
        await self._writer.wait_closed()


class AsyncioTcpConnector:
    """
    Full-handshake connect via asyncio streams. Name resolution runs inside the
    same timeout window, so a slow resolver counts against the attempt.
    """

    async def open(self, host: str, port: int, timeout: float) -> StreamConnection:
        async with asyncio.timeout(timeout):
            _reader, writer = await asyncio.open_connection(host, port)
        LOG.debug("connect.established", extra={"extra": {"host": host, "port": port}})
        return StreamConnection(writer)

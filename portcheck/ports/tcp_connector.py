# /portcheck/ports/tcp_connector.py
from __future__ import annotations

from typing import Protocol


class ConnectionPort(Protocol):
    async def close(self) -> None:
        """Close an established connection."""


class TcpConnectorPort(Protocol):
    async def open(self, host: str, port: int, timeout: float) -> ConnectionPort:
        """Complete a TCP handshake or raise TimeoutError / OSError."""

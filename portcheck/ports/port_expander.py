# /portcheck/ports/port_expander.py
from __future__ import annotations

from typing import Protocol

from portcheck.domain.endpoint import Endpoint


class PortExpanderPort(Protocol):
    def expand(self, host: str, ports: str | None) -> list[Endpoint]:
        """Expand a port specification into endpoints for host (all ports when None)."""

# /portcheck/domain/endpoint.py
from __future__ import annotations

import enum
from dataclasses import dataclass

PORT_MIN = 1
PORT_MAX = 65535


@dataclass(frozen=True, slots=True)
class Endpoint:
    host: str
    port: int

    @property
    def address(self) -> str:
        # IPv6 literals need brackets, same as a host:port join
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


class ProbeOutcome(str, enum.Enum):
    OPEN = "open"
    TIMEOUT = "timeout"
    REFUSED = "refused"
    UNREACHABLE = "unreachable"

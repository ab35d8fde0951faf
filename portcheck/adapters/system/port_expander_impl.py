# /portcheck/adapters/system/port_expander_impl.py
from __future__ import annotations

import logging
import re

from portcheck.domain.endpoint import PORT_MAX, PORT_MIN, Endpoint

LOG = logging.getLogger("adapter.port_expander")

_DECIMAL = re.compile(r"[0-9]+")


def _parse_port(raw: str) -> int | None:
    s = raw.strip()
    if not _DECIMAL.fullmatch(s):
        return None
    port = int(s)
    if port < PORT_MIN or port > PORT_MAX:
        return None
    return port


def parse_token(token: str) -> range:
    """
    Ports named by one comma-separated token: "80" or "8000-8010".
    Malformed, out-of-range and reversed tokens give an empty range.
    """
    bounds = token.split("-")
    if len(bounds) > 2:
        return range(0)
    low = _parse_port(bounds[0])
    high = low if len(bounds) == 1 else _parse_port(bounds[1])
    if low is None or high is None:
        return range(0)
    return range(low, high + 1)  # empty when low > high


class PortExpander:
    def expand(self, host: str, ports: str | None) -> list[Endpoint]:
        if ports is None:
            out = [Endpoint(host, p) for p in range(PORT_MIN, PORT_MAX + 1)]
            LOG.info("expanded ports", extra={"extra": {"host": host, "spec": None, "out": len(out)}})
            return out

        out: list[Endpoint] = []
        for token in ports.split(","):
            span = parse_token(token)
            if not span:
                LOG.debug("port token discarded", extra={"extra": {"token": token}})
                continue
            out.extend(Endpoint(host, p) for p in span)

        LOG.info("expanded ports", extra={"extra": {"host": host, "spec": ports, "out": len(out)}})
        return out

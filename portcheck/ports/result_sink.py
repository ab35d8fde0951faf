# /portcheck/ports/result_sink.py
from __future__ import annotations

from typing import Protocol

from portcheck.domain.endpoint import Endpoint


class ResultSinkPort(Protocol):
    def report(self, endpoint: Endpoint) -> None:
        """Publish one open endpoint as soon as it is discovered."""

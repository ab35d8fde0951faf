# /portcheck/ports/job_queue.py
from __future__ import annotations

from typing import Protocol


class JobQueuePort(Protocol):
    def enqueue_probe(self, scan_id: str, host: str, ports: str | None) -> str:
        """Schedule a background probe run and return the provider job id."""

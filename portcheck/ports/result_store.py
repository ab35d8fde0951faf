# /portcheck/ports/result_store.py
from __future__ import annotations

from typing import Protocol


class ResultStorePort(Protocol):
    def set_pending(self, scan_id: str) -> None: ...

    def add_open(self, scan_id: str, address: str) -> None: ...

    def set_result(self, scan_id: str, result: dict) -> None: ...

    def set_error(self, scan_id: str, error: str) -> None: ...

    def get(self, scan_id: str) -> dict | None:
        """Return the stored record or None when scan_id is unknown."""

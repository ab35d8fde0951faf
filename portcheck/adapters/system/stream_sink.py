# /portcheck/adapters/system/stream_sink.py
from __future__ import annotations

import sys
import threading
from typing import TextIO

from portcheck.domain.endpoint import Endpoint
from portcheck.ports.result_store import ResultStorePort


class StreamResultSink:
    """Writes one `SUCCESS: host:port` line per open endpoint."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def report(self, endpoint: Endpoint) -> None:
        line = f"SUCCESS: {endpoint.address}\n"
        stream = self._stream if self._stream is not None else sys.stdout
        with self._lock:
            stream.write(line)
            stream.flush()


class StoreResultSink:
    """Appends open endpoints to a job record as they are discovered."""

    def __init__(self, store: ResultStorePort, scan_id: str) -> None:
        self._store = store
        self._scan_id = scan_id

    def report(self, endpoint: Endpoint) -> None:
        self._store.add_open(self._scan_id, endpoint.address)

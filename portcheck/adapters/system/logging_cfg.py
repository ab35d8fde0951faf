# /portcheck/adapters/system/logging_cfg.py
from __future__ import annotations

import json
import logging
import sys
from typing import Any, TextIO


def configure_logger(level: int | str = logging.INFO, stream: TextIO | None = None) -> None:
    """Install a JSON-lines handler on the root logger; stderr by default so stdout carries results only."""

    class JSONHandler(logging.StreamHandler):
        def emit(self, record: logging.LogRecord) -> None:
            payload: dict[str, Any] = {
                "level": record.levelname,
                "msg": record.getMessage(),
                "logger": record.name,
            }
            extra = getattr(record, "extra", None)
            if isinstance(extra, dict):
                payload.update(extra)
            if record.exc_info:
                payload["exc"] = logging.Formatter().formatException(record.exc_info)
            self.stream.write(json.dumps(payload, default=str) + "\n")
            self.flush()

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level.upper() if isinstance(level, str) else level)
    root.addHandler(JSONHandler(stream=stream if stream is not None else sys.stderr))

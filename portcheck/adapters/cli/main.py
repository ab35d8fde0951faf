# /portcheck/adapters/cli/main.py
from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Sequence

from portcheck.adapters.net.asyncio_connector import AsyncioTcpConnector
from portcheck.adapters.system.logging_cfg import configure_logger
from portcheck.adapters.system.port_expander_impl import PortExpander
from portcheck.adapters.system.stream_sink import StreamResultSink
from portcheck.config import settings
from portcheck.domain.probe_service import ProbeService

LOG = logging.getLogger("adapter.cli")


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {raw}")
    return value


def _positive_float(raw: str) -> float:
    value = float(raw)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {raw}")
    return value


def _log_level(raw: str) -> str:
    level = raw.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise argparse.ArgumentTypeError(f"unknown log level {raw!r}")
    return level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portcheck",
        description="Report which TCP ports of HOST accept a connection.",
        epilog="A PORTS value starting with '-' must follow '--', e.g. portcheck HOST -- -5,80",
    )
    parser.add_argument("host", metavar="HOST", help="hostname or IP address")
    parser.add_argument(
        "ports",
        metavar="PORTS",
        nargs="?",
        default=None,
        help="port, low-high range, or comma-separated mix (default: 1-65535)",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=settings.TIMEOUT_SECONDS,
        help="seconds per connect attempt (default: %(default)s)",
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=settings.WORKERS,
        help="maximum concurrent attempts (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        type=_log_level,
        default=settings.LOG_LEVEL,
        help="log level for stderr diagnostics (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logger(args.log_level)

    endpoints = PortExpander().expand(args.host, args.ports)
    svc = ProbeService(
        AsyncioTcpConnector(),
        StreamResultSink(),
        workers=args.workers,
        timeout=args.timeout,
    )
    report = asyncio.run(svc.probe(endpoints))
    LOG.debug("cli.done", extra={"extra": {"outcomes": report.as_dict()["outcomes"]}})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

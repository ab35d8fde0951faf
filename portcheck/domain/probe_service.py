# /portcheck/domain/probe_service.py
from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from portcheck.domain.endpoint import Endpoint, ProbeOutcome
from portcheck.domain.slot_pool import BoundedTaskPool, Slot
from portcheck.ports.result_sink import ResultSinkPort
from portcheck.ports.tcp_connector import ConnectionPort, TcpConnectorPort

LOG = logging.getLogger("probe_service")

# ==== DTOs ====


@dataclass(slots=True)
class ProbeReport:
    endpoints: int
    open: list[Endpoint] = field(default_factory=list)  # discovery order
    outcomes: Counter = field(default_factory=Counter)
    peak_in_flight: int = 0
    errors: list[dict] = field(default_factory=list)  # result-reporting failures

    @property
    def attempted(self) -> int:
        return sum(self.outcomes.values())

    def as_dict(self) -> dict:
        return {
            "endpoints": self.endpoints,
            "attempted": self.attempted,
            "open": [e.address for e in self.open],
            "outcomes": {o.value: self.outcomes.get(o, 0) for o in ProbeOutcome},
            "peak_in_flight": self.peak_in_flight,
            "errors": self.errors,
        }


# ==== Service ====


class ProbeService:
    """Connect-probes endpoints through a bounded pool and reports open ones."""

    def __init__(
        self,
        connector: TcpConnectorPort,
        sink: ResultSinkPort,
        *,
        workers: int,
        timeout: float,
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        if timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {timeout}")
        self.connector = connector
        self.sink = sink
        self.workers = workers
        self.timeout = timeout

    async def _connect(self, endpoint: Endpoint) -> tuple[ProbeOutcome, ConnectionPort | None]:
        try:
            conn = await self.connector.open(endpoint.host, endpoint.port, self.timeout)
        except TimeoutError:
            return ProbeOutcome.TIMEOUT, None
        except ConnectionRefusedError:
            return ProbeOutcome.REFUSED, None
        except (OSError, ValueError) as e:
            # ValueError covers UnicodeError from IDNA encoding of bad hostnames
            LOG.debug(
                "probe.unreachable",
                extra={"extra": {"target": endpoint.address, "error": type(e).__name__, "detail": str(e)}},
            )
            return ProbeOutcome.UNREACHABLE, None
        return ProbeOutcome.OPEN, conn

    async def _close(self, endpoint: Endpoint, conn: ConnectionPort) -> None:
        try:
            await conn.close()
        except Exception as e:
            # the port was open; a failed close is only a diagnostic
            LOG.warning(
                "probe.close_failed",
                extra={"extra": {"target": endpoint.address, "error": type(e).__name__, "detail": str(e)}},
            )

    async def _attempt(self, endpoint: Endpoint, report: ProbeReport, slot: Slot) -> None:
        try:
            outcome, conn = await self._connect(endpoint)
        finally:
            slot.release()

        report.outcomes[outcome] += 1
        if conn is None:
            return

        report.open.append(endpoint)
        try:
            self.sink.report(endpoint)
        except Exception as e:
            # a lost result line does not stop the remaining attempts
            report.errors.append({"target": endpoint.address, "error": type(e).__name__, "detail": str(e)})
            LOG.error("probe.report_failed", extra={"extra": report.errors[-1]})
        finally:
            await self._close(endpoint, conn)

    async def probe(self, endpoints: Sequence[Endpoint]) -> ProbeReport:
        report = ProbeReport(endpoints=len(endpoints))
        LOG.info(
            "probe.start",
            extra={"extra": {"endpoints": len(endpoints), "workers": self.workers, "timeout": self.timeout}},
        )

        pool = BoundedTaskPool(self.workers)
        async with pool:
            for ep in endpoints:
                await pool.submit(lambda slot, ep=ep: self._attempt(ep, report, slot))

        report.peak_in_flight = pool.peak_in_flight
        LOG.info(
            "probe.done",
            extra={"extra": {"endpoints": report.endpoints, "open": len(report.open)}},
        )
        return report

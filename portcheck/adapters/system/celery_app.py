# /portcheck/adapters/system/celery_app.py
from __future__ import annotations
import asyncio
import logging
from typing import Any

from celery import Celery

from portcheck.config import settings
from portcheck.adapters.net.asyncio_connector import AsyncioTcpConnector
from portcheck.adapters.system.logging_cfg import configure_logger
from portcheck.adapters.system.port_expander_impl import PortExpander
from portcheck.adapters.system.redis_result_store import RedisResultStore
from portcheck.adapters.system.stream_sink import StoreResultSink
from portcheck.domain.probe_service import ProbeService
from portcheck.ports.port_expander import PortExpanderPort
from portcheck.ports.result_store import ResultStorePort
from portcheck.ports.tcp_connector import TcpConnectorPort

LOG = logging.getLogger("adapter.celery")
configure_logger(settings.LOG_LEVEL)

celery_app = Celery("portcheck", broker=settings.REDIS_URL, backend=settings.REDIS_URL)
celery_app.conf.update(
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_time_limit=settings.CELERY_TASK_TIME_LIMIT,
)

# Lightweight objects are fine to create at import-time:
_store: ResultStorePort = RedisResultStore(settings.REDIS_URL, ttl_seconds=settings.RESULT_TTL_SECONDS)
_expander: PortExpanderPort = PortExpander()
_connector: TcpConnectorPort = AsyncioTcpConnector()


class CeleryJobQueue:
    def __init__(self, app: Celery = celery_app) -> None:
        self._app = app

    def enqueue_probe(self, scan_id: str, host: str, ports: str | None) -> str:
        job = self._app.send_task("probe_job", args=[scan_id, {"host": host, "ports": ports}], kwargs=None)
        return job.id


def _build_service(scan_id: str) -> ProbeService:
    return ProbeService(
        connector=_connector,
        sink=StoreResultSink(_store, scan_id),
        workers=settings.WORKERS,
        timeout=settings.TIMEOUT_SECONDS,
    )


# No autoretry: a failed attempt is final for the run.
@celery_app.task(name="probe_job", bind=True)
def probe_job(self, scan_id: str, payload: dict[str, Any]) -> str:
    """Probe one host, streaming open ports into the store, then persist the summary."""
    try:
        LOG.info("probe.job.accepted", extra={"extra": {"scan_id": scan_id}})
        endpoints = _expander.expand(payload["host"], payload.get("ports"))
        svc = _build_service(scan_id)
        report = asyncio.run(svc.probe(endpoints))
        _store.set_result(scan_id, report.as_dict())
        LOG.info("probe.job.done", extra={"extra": {"scan_id": scan_id, "open": len(report.open)}})
        return "ok"

    except Exception as e:
        _store.set_error(scan_id, str(e))
        LOG.exception("probe.job.error", extra={"extra": {"scan_id": scan_id}})
        raise

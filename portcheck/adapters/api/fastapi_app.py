# /portcheck/adapters/api/fastapi_app.py
from __future__ import annotations
import logging
import uuid
from typing import Optional

from fastapi import FastAPI, Header, HTTPException
from pydantic import BaseModel

from portcheck.config import settings
from portcheck.adapters.system.logging_cfg import configure_logger
from portcheck.adapters.system.port_expander_impl import PortExpander
from portcheck.adapters.system.redis_result_store import RedisResultStore
from portcheck.adapters.system.celery_app import CeleryJobQueue
from portcheck.ports.job_queue import JobQueuePort
from portcheck.ports.port_expander import PortExpanderPort
from portcheck.ports.result_store import ResultStorePort

LOG = logging.getLogger("adapter.api")
app = FastAPI(title="portcheck")
configure_logger(settings.LOG_LEVEL)

_store: ResultStorePort = RedisResultStore(settings.REDIS_URL, ttl_seconds=settings.RESULT_TTL_SECONDS)
_queue: JobQueuePort = CeleryJobQueue()
_expander: PortExpanderPort = PortExpander()

class ScanRequestModel(BaseModel):
    host: str
    ports: Optional[str] = None

def _check_key(x_api_key: str | None) -> None:
    if settings.API_KEY and x_api_key != settings.API_KEY:
        raise HTTPException(status_code=401, detail="invalid api key")

@app.get("/health")
def health() -> dict:
    return {"status": "ok"}

@app.post("/scan")
async def scan_start(payload: ScanRequestModel, x_api_key: str | None = Header(default=None)) -> dict:
    _check_key(x_api_key)
    host = payload.host.strip()
    if not host:
        raise HTTPException(status_code=400, detail="host required")

    endpoints = len(_expander.expand(host, payload.ports))
    if endpoints > settings.MAX_ENDPOINTS_PER_JOB:
        raise HTTPException(status_code=400, detail="request too large (endpoints cap)")

    scan_id = str(uuid.uuid4())
    _store.set_pending(scan_id)

    job_id = _queue.enqueue_probe(scan_id, host, payload.ports)
    LOG.info("scan.enqueued", extra={"extra": {"scan_id": scan_id, "job_id": job_id, "endpoints": endpoints}})
    return {"scan_id": scan_id, "status": "pending", "job_id": job_id, "endpoints": endpoints}

@app.get("/scan/{scan_id}")
async def scan_result(scan_id: str, x_api_key: str | None = Header(default=None)) -> dict:
    _check_key(x_api_key)
    entry = _store.get(scan_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="scan_id not found")
    return entry

# /portcheck/adapters/system/redis_result_store.py
from __future__ import annotations
import json
import logging
from typing import Any

import redis

LOG = logging.getLogger("adapter.result_store.redis")


class RedisResultStore:
    """
    One hash per probe job (`prefix:id`) plus a list of open addresses
    (`prefix:id:open`) appended in discovery order. Both keys share a TTL
    that is refreshed on every write.
    """

    def __init__(self, redis_url: str, prefix: str = "portcheck", ttl_seconds: int | None = None) -> None:
        self._r = redis.Redis.from_url(redis_url, decode_responses=True)
        self._prefix = prefix
        self._ttl = ttl_seconds

    def _key(self, scan_id: str) -> str:
        return f"{self._prefix}:{scan_id}"

    def _open_key(self, scan_id: str) -> str:
        return f"{self._key(scan_id)}:open"

    def _write_record(self, scan_id: str, mapping: dict[str, str]) -> None:
        key = self._key(scan_id)
        pipe = self._r.pipeline()
        pipe.hset(key, mapping=mapping)
        if self._ttl:
            pipe.expire(key, self._ttl)
            pipe.expire(self._open_key(scan_id), self._ttl)
        pipe.execute()

    def set_pending(self, scan_id: str) -> None:
        self._write_record(scan_id, {"status": "pending"})
        LOG.info("store.set_pending", extra={"extra": {"scan_id": scan_id}})

    def add_open(self, scan_id: str, address: str) -> None:
        key = self._open_key(scan_id)
        pipe = self._r.pipeline()
        pipe.rpush(key, address)
        if self._ttl:
            pipe.expire(key, self._ttl)
        pipe.execute()
        LOG.info("store.add_open", extra={"extra": {"scan_id": scan_id, "target": address}})

    def set_error(self, scan_id: str, error: str) -> None:
        self._write_record(scan_id, {"status": "error", "error": error})
        LOG.warning("store.set_error", extra={"extra": {"scan_id": scan_id, "error": error}})

    def set_result(self, scan_id: str, result: dict) -> None:
        self._write_record(scan_id, {"status": "done", "result": json.dumps(result)})
        LOG.info("store.set_result", extra={"extra": {"scan_id": scan_id, "open": len(result.get("open", []))}})

    def get(self, scan_id: str) -> dict | None:
        data = self._r.hgetall(self._key(scan_id))
        if not data:
            return None
        opened = list(self._r.lrange(self._open_key(scan_id), 0, -1))
        out: dict[str, Any] = {"status": data.get("status"), "open": opened, "open_count": len(opened)}
        if "error" in data:
            out["error"] = data["error"]
        if "result" in data:
            try:
                out["result"] = json.loads(data["result"])
            except json.JSONDecodeError:
                LOG.warning("store.bad_result", extra={"extra": {"scan_id": scan_id}})
                out["result"] = None
        return out

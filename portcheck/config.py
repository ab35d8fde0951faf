# /portcheck/config.py
from __future__ import annotations

import os

from pydantic import BaseModel

_WORKERS_PER_CPU = int(os.getenv("WORKERS_PER_CPU", "10"))


class Settings(BaseModel):
    API_KEY: str | None = os.getenv("API_KEY")

    # Probing
    TIMEOUT_SECONDS: float = float(os.getenv("TIMEOUT_SECONDS", "3.0"))  # per connect attempt
    WORKERS_PER_CPU: int = _WORKERS_PER_CPU
    WORKERS: int = int(os.getenv("WORKERS", str(_WORKERS_PER_CPU * (os.cpu_count() or 1))))
    MAX_ENDPOINTS_PER_JOB: int = int(os.getenv("MAX_ENDPOINTS_PER_JOB", "131070"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Celery / Redis
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    CELERY_TASK_TIME_LIMIT: int = int(os.getenv("CELERY_TASK_TIME_LIMIT", "3600"))
    RESULT_TTL_SECONDS: int = int(os.getenv("RESULT_TTL_SECONDS", "86400"))


settings = Settings()

# /portcheck/domain/slot_pool.py
from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from types import TracebackType


class Slot:
    """One unit of pool capacity, held by exactly one running task."""

    __slots__ = ("_pool", "_released")

    def __init__(self, pool: BoundedTaskPool) -> None:
        self._pool = pool
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._pool._release()


Work = Callable[[Slot], Awaitable[None]]


class BoundedTaskPool:
    """
    Runs submitted coroutines with at most `capacity` of them holding a slot.
    submit() blocks the caller while the pool is saturated; leaving the
    `async with` block waits for every submitted task to finish.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"pool capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._sem = asyncio.Semaphore(capacity)
        self._tg: asyncio.TaskGroup | None = None
        self._in_flight = 0
        self._peak = 0
        self._submitted = 0

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def peak_in_flight(self) -> int:
        return self._peak

    @property
    def submitted(self) -> int:
        return self._submitted

    async def __aenter__(self) -> BoundedTaskPool:
        self._tg = asyncio.TaskGroup()
        await self._tg.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool | None:
        assert self._tg is not None
        try:
            return await self._tg.__aexit__(exc_type, exc, tb)
        finally:
            self._tg = None

    async def submit(self, work: Work) -> None:
        if self._tg is None:
            raise RuntimeError("submit() called outside of 'async with pool'")
        await self._sem.acquire()
        self._in_flight += 1
        self._peak = max(self._peak, self._in_flight)
        self._submitted += 1
        slot = Slot(self)
        self._tg.create_task(self._run(work, slot))

    @staticmethod
    async def _run(work: Work, slot: Slot) -> None:
        try:
            await work(slot)
        finally:
            slot.release()

    def _release(self) -> None:
        self._in_flight -= 1
        self._sem.release()

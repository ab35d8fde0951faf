# tests/test_slot_pool.py
import asyncio

import pytest

from portcheck.domain.slot_pool import BoundedTaskPool


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        BoundedTaskPool(0)


@pytest.mark.asyncio
async def test_submit_outside_context_fails():
    with pytest.raises(RuntimeError):
        await BoundedTaskPool(2).submit(lambda slot: asyncio.sleep(0))


@pytest.mark.asyncio
async def test_drains_all_work_and_caps_in_flight():
    done = []
    observed = []
    pool = BoundedTaskPool(3)

    async def work(i, slot):
        observed.append(pool.in_flight)
        await asyncio.sleep(0.001)
        done.append(i)

    async with pool:
        for i in range(25):
            await pool.submit(lambda slot, i=i: work(i, slot))

    assert sorted(done) == list(range(25))
    assert max(observed) <= 3
    assert pool.peak_in_flight == 3
    assert pool.submitted == 25
    assert pool.in_flight == 0


@pytest.mark.asyncio
async def test_early_release_frees_slot_once():
    pool = BoundedTaskPool(1)
    second_started = asyncio.Event()

    async def first(slot):
        slot.release()
        slot.release()
        await asyncio.wait_for(second_started.wait(), 1.0)

    async def second(slot):
        second_started.set()

    async with pool:
        await pool.submit(first)
        await pool.submit(second)

    assert pool.in_flight == 0
    assert pool.peak_in_flight == 1

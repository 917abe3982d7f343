from __future__ import annotations

import asyncio

import pytest

from skillquiz.workers import cache_eviction


class _CountingPipeline:
    def __init__(self) -> None:
        self.evictions = 0

    def evict_expired(self) -> list[str]:
        self.evictions += 1
        return []


@pytest.mark.asyncio
async def test_eviction_loop_sweeps_until_stopped() -> None:
    pipeline = _CountingPipeline()
    task, stop_event = cache_eviction.start_cache_eviction(pipeline, interval_seconds=0.01)  # type: ignore[arg-type]

    await asyncio.sleep(0.08)
    stop_event.set()
    sweeps = await asyncio.wait_for(task, timeout=1)

    assert sweeps >= 1
    assert sweeps == pipeline.evictions


@pytest.mark.asyncio
async def test_eviction_loop_exits_immediately_when_already_stopped() -> None:
    pipeline = _CountingPipeline()
    stop_event = asyncio.Event()
    stop_event.set()

    sweeps = await cache_eviction.run_cache_eviction_loop(
        pipeline,  # type: ignore[arg-type]
        interval_seconds=60,
        stop_event=stop_event,
    )

    assert sweeps == 0
    assert pipeline.evictions == 0


@pytest.mark.asyncio
async def test_stop_during_wait_does_not_sweep() -> None:
    pipeline = _CountingPipeline()
    task, stop_event = cache_eviction.start_cache_eviction(pipeline, interval_seconds=60)  # type: ignore[arg-type]

    await asyncio.sleep(0)
    stop_event.set()

    assert await asyncio.wait_for(task, timeout=1) == 0
    assert pipeline.evictions == 0

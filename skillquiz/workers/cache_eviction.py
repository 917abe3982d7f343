from __future__ import annotations

import asyncio

import structlog

from skillquiz.questions.pipeline import QuestionSourcingPipeline

logger = structlog.get_logger(__name__)


async def run_cache_eviction_loop(
    pipeline: QuestionSourcingPipeline,
    *,
    interval_seconds: float,
    stop_event: asyncio.Event,
) -> int:
    sweeps = 0
    logger.info("question_cache_eviction_started", interval_seconds=interval_seconds)
    while not stop_event.is_set():
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval_seconds)
        except asyncio.TimeoutError:
            pipeline.evict_expired()
            sweeps += 1
    logger.info("question_cache_eviction_stopped", sweeps=sweeps)
    return sweeps


def start_cache_eviction(
    pipeline: QuestionSourcingPipeline,
    *,
    interval_seconds: float,
) -> tuple[asyncio.Task[int], asyncio.Event]:
    stop_event = asyncio.Event()
    task = asyncio.create_task(
        run_cache_eviction_loop(
            pipeline,
            interval_seconds=interval_seconds,
            stop_event=stop_event,
        ),
        name="question-cache-eviction",
    )
    return task, stop_event

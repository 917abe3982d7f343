from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Any

import structlog

from skillquiz.questions import static_bank
from skillquiz.questions.pipeline import QuestionSourcingPipeline
from skillquiz.questions.types import Question

logger = structlog.get_logger(__name__)


async def questions_for_technology(
    pipeline: QuestionSourcingPipeline,
    technology: str,
    count: int = 3,
    *,
    rng: random.Random | None = None,
) -> list[Question]:
    local_questions = static_bank.questions_for(technology, count * 2, rng=rng)
    resolved = await pipeline.get_questions(technology, count, local_questions)
    if len(resolved) >= count:
        return resolved

    resolved_ids = {question.question_id for question in resolved}
    padding = [question for question in local_questions if question.question_id not in resolved_ids]
    padded = [*resolved, *padding[: count - len(resolved)]]
    logger.info(
        "quiz_questions_padded",
        technology=technology,
        resolved=len(resolved),
        padded=len(padded) - len(resolved),
    )
    return padded


async def assemble_quiz(
    pipeline: QuestionSourcingPipeline,
    technologies: Sequence[str],
    per_technology: int = 3,
    *,
    rng: random.Random | None = None,
) -> list[Question]:
    pipeline.evict_expired()
    await pipeline.preload(technologies)

    combined: list[Question] = []
    for technology in technologies:
        combined.extend(await questions_for_technology(pipeline, technology, per_technology, rng=rng))

    logger.info(
        "quiz_assembled",
        technologies=list(technologies),
        question_count=len(combined),
    )
    return static_bank.shuffled(combined, rng=rng)


async def has_questions_available(pipeline: QuestionSourcingPipeline, technology: str) -> bool:
    if static_bank.has_questions(technology):
        return True
    return bool(await pipeline.get_questions(technology, 1))


def question_source_info(pipeline: QuestionSourcingPipeline) -> dict[str, Any]:
    return {
        "local": static_bank.question_count(),
        "cached": len(pipeline.cache),
        "technologies": static_bank.available_technologies(),
    }

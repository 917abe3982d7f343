from __future__ import annotations

from fastapi import APIRouter, Query, Request

from skillquiz.api.routes.quiz_models import (
    AssembleQuizRequest,
    AssembleQuizResponse,
    AvailabilityResponse,
    EvictResponse,
    PreloadRequest,
    PreloadResponse,
    QuestionBatchResponse,
    QuestionPayload,
    QuizStatusResponse,
)
from skillquiz.questions import static_bank
from skillquiz.questions.pipeline import QuestionSourcingPipeline
from skillquiz.services.quiz_assembly import assemble_quiz, has_questions_available, question_source_info

router = APIRouter(prefix="/quiz", tags=["quiz"])
MAX_QUESTIONS_PER_REQUEST = 50


def _pipeline(request: Request) -> QuestionSourcingPipeline:
    return request.app.state.question_pipeline


@router.get("/questions", response_model=QuestionBatchResponse)
async def get_questions(
    request: Request,
    technology: str = Query(min_length=1, max_length=64, pattern=r"\S"),
    count: int = Query(default=3, ge=1, le=MAX_QUESTIONS_PER_REQUEST),
) -> QuestionBatchResponse:
    local_questions = static_bank.questions_for(technology, count * 2)
    batch = await _pipeline(request).resolve(technology, count, local_questions)
    return QuestionBatchResponse(
        technology=technology.strip(),
        source=batch.origin.value if batch.origin is not None else None,
        questions=[QuestionPayload.from_question(question) for question in batch.questions],
    )


@router.post("/assemble", response_model=AssembleQuizResponse)
async def assemble(request: Request, body: AssembleQuizRequest) -> AssembleQuizResponse:
    technologies = [technology.strip() for technology in body.technologies if technology.strip()]
    questions = await assemble_quiz(_pipeline(request), technologies, body.per_technology)
    return AssembleQuizResponse(questions=[QuestionPayload.from_question(question) for question in questions])


@router.post("/preload", response_model=PreloadResponse)
async def preload(request: Request, body: PreloadRequest) -> PreloadResponse:
    technologies = [technology.strip() for technology in body.technologies if technology.strip()]
    await _pipeline(request).preload(technologies)
    return PreloadResponse(status="ok", technologies=technologies)


@router.post("/cache/evict", response_model=EvictResponse)
async def evict_cache(request: Request) -> EvictResponse:
    return EvictResponse(evicted=_pipeline(request).evict_expired())


@router.get("/status", response_model=QuizStatusResponse)
async def quiz_status(request: Request) -> QuizStatusResponse:
    pipeline = _pipeline(request)
    client = pipeline.quiz_api_client
    return QuizStatusResponse(
        quiz_api={
            "enabled": client is not None and client.enabled,
            "configured": client is not None and client.is_configured,
        },
        cache=pipeline.cache.snapshot(),
        local=question_source_info(pipeline),
    )


@router.get("/availability", response_model=AvailabilityResponse)
async def availability(
    request: Request,
    technology: str = Query(min_length=1, max_length=64, pattern=r"\S"),
) -> AvailabilityResponse:
    return AvailabilityResponse(
        technology=technology.strip(),
        available=await has_questions_available(_pipeline(request), technology),
    )

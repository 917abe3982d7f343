from __future__ import annotations

import asyncio
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from skillquiz.questions.pipeline import QuestionSourcingPipeline

router = APIRouter(tags=["health"])
HEALTHY_STATUSES = {"ok", "disabled"}


def _ok_check(extra: dict[str, Any] | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"status": "ok"}
    if extra:
        payload.update(extra)
    return payload


def _failed_check(error: str) -> dict[str, str]:
    return {"status": "failed", "error": error}


def _pipeline(request: Request) -> QuestionSourcingPipeline:
    return request.app.state.question_pipeline


async def _check_quiz_api(pipeline: QuestionSourcingPipeline) -> dict[str, Any]:
    client = pipeline.quiz_api_client
    if client is None or not client.is_configured:
        return {"status": "disabled"}
    try:
        reachable = await client.ping()
    except Exception:
        return _failed_check("quiz_api_unavailable")
    return _ok_check() if reachable else _failed_check("quiz_api_unreachable")


async def _check_question_cache(pipeline: QuestionSourcingPipeline) -> dict[str, Any]:
    return _ok_check(
        {
            "entries": len(pipeline.cache),
            "ttl_seconds": pipeline.cache.ttl_seconds,
        }
    )


async def _collect_checks(pipeline: QuestionSourcingPipeline) -> dict[str, dict[str, Any]]:
    checks = await asyncio.gather(
        _check_quiz_api(pipeline),
        _check_question_cache(pipeline),
    )
    return {
        "quiz_api": checks[0],
        "question_cache": checks[1],
    }


def _all_checks_ok(checks: dict[str, dict[str, Any]]) -> bool:
    return all(check.get("status") in HEALTHY_STATUSES for check in checks.values())


@router.get("/live")
async def live() -> dict[str, str]:
    return {"status": "live"}


@router.get("/health")
async def health(request: Request) -> JSONResponse:
    checks = await _collect_checks(_pipeline(request))
    is_healthy = _all_checks_ok(checks)
    return JSONResponse(
        status_code=status.HTTP_200_OK if is_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ok" if is_healthy else "degraded",
            "checks": checks,
        },
    )

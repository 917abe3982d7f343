from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import structlog

from skillquiz.questions.errors import SourceUnavailableError
from skillquiz.questions.quizapi_client import QuizApiClient
from skillquiz.questions.synthetic import generate_synthetic_questions
from skillquiz.questions.types import Question, QuestionOrigin, QuestionRequest

logger = structlog.get_logger(__name__)


class QuestionSource(Protocol):
    origin: QuestionOrigin

    async def attempt(self, request: QuestionRequest) -> Sequence[Question] | None: ...


class RemoteQuestionSource:
    origin = QuestionOrigin.REMOTE

    def __init__(self, client: QuizApiClient) -> None:
        self._client = client

    @property
    def client(self) -> QuizApiClient:
        return self._client

    async def attempt(self, request: QuestionRequest) -> Sequence[Question] | None:
        try:
            return await self._client.fetch_questions(request.technology, request.count)
        except SourceUnavailableError as exc:
            logger.info(
                "question_source_unavailable",
                source=self.origin.value,
                technology=request.technology,
                reason=str(exc),
            )
            return None


class LocalFallbackSource:
    origin = QuestionOrigin.LOCAL

    async def attempt(self, request: QuestionRequest) -> Sequence[Question] | None:
        return request.local_fallback or None


class SyntheticQuestionSource:
    origin = QuestionOrigin.SYNTHETIC

    async def attempt(self, request: QuestionRequest) -> Sequence[Question] | None:
        return generate_synthetic_questions(request.technology, request.count)

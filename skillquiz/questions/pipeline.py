from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable, Sequence

import httpx
import structlog

from skillquiz.core.config import Settings, get_settings
from skillquiz.questions import static_bank
from skillquiz.questions.cache import QuestionCache, cache_key
from skillquiz.questions.errors import SourceUnavailableError
from skillquiz.questions.quizapi_client import QuizApiClient
from skillquiz.questions.sources import (
    LocalFallbackSource,
    QuestionSource,
    RemoteQuestionSource,
    SyntheticQuestionSource,
)
from skillquiz.questions.types import Question, QuestionBatch, QuestionOrigin, QuestionRequest

logger = structlog.get_logger(__name__)

PRELOAD_QUESTION_COUNT = 5

FallbackProvider = Callable[[str, int], Sequence[Question]]

_EMPTY_BATCH = QuestionBatch(questions=(), origin=None)


class QuestionSourcingPipeline:
    """Resolves quiz questions for a technology: cache, then each source in order.

    The first source that yields at least one question wins; its full result is
    cached and the first ``count`` questions are returned. A source signals
    "nothing here" by returning ``None``/an empty sequence or by raising
    ``SourceUnavailableError``. Anything else it raises is a defect and
    propagates.
    """

    def __init__(
        self,
        *,
        cache: QuestionCache,
        sources: Sequence[QuestionSource],
        preload_count: int = PRELOAD_QUESTION_COUNT,
        fallback_provider: FallbackProvider | None = None,
    ) -> None:
        self._cache = cache
        self._sources = tuple(sources)
        self._preload_count = max(1, preload_count)
        self._fallback_provider = fallback_provider

    @property
    def cache(self) -> QuestionCache:
        return self._cache

    @property
    def sources(self) -> tuple[QuestionSource, ...]:
        return self._sources

    @property
    def quiz_api_client(self) -> QuizApiClient | None:
        for source in self._sources:
            if isinstance(source, RemoteQuestionSource):
                return source.client
        return None

    async def resolve(
        self,
        technology: str,
        count: int,
        local_fallback: Sequence[Question] = (),
    ) -> QuestionBatch:
        technology = technology.strip()
        if not technology:
            raise ValueError("technology must be a non-empty string")
        if count < 1:
            return _EMPTY_BATCH

        cached = self._cache.get(technology)
        if cached is not None and len(cached.questions) >= count:
            logger.debug(
                "question_cache_hit",
                technology=cache_key(technology),
                cached_origin=cached.origin.value,
                count=count,
            )
            return QuestionBatch(questions=cached.questions[:count], origin=QuestionOrigin.CACHE)

        request = QuestionRequest(
            technology=technology,
            count=count,
            local_fallback=tuple(local_fallback),
        )
        for source in self._sources:
            try:
                questions = await source.attempt(request)
            except SourceUnavailableError as exc:
                logger.info(
                    "question_source_unavailable",
                    source=source.origin.value,
                    technology=technology,
                    reason=str(exc),
                )
                continue
            if not questions:
                continue

            entry = self._cache.put(technology, questions, origin=source.origin)
            logger.info(
                "questions_resolved",
                technology=cache_key(technology),
                origin=source.origin.value,
                requested=count,
                available=len(entry.questions),
            )
            return QuestionBatch(questions=entry.questions[:count], origin=source.origin)

        logger.warning("questions_unavailable", technology=cache_key(technology), requested=count)
        return _EMPTY_BATCH

    async def get_questions(
        self,
        technology: str,
        count: int,
        local_fallback: Sequence[Question] = (),
    ) -> list[Question]:
        batch = await self.resolve(technology, count, local_fallback)
        return list(batch.questions)

    async def _preload_one(self, technology: str) -> None:
        fallback: Sequence[Question] = ()
        if self._fallback_provider is not None:
            fallback = self._fallback_provider(technology, self._preload_count)
        await self.get_questions(technology, self._preload_count, fallback)

    async def preload(self, technologies: Iterable[str]) -> None:
        distinct: dict[str, str] = {}
        for technology in technologies:
            key = cache_key(technology)
            if key and key not in distinct:
                distinct[key] = technology.strip()
        if not distinct:
            return

        results = await asyncio.gather(
            *(self._preload_one(technology) for technology in distinct.values()),
            return_exceptions=True,
        )
        failed: list[str] = []
        for technology, result in zip(distinct, results):
            if isinstance(result, Exception):
                failed.append(technology)
                logger.warning(
                    "question_preload_failed",
                    technology=technology,
                    error_type=type(result).__name__,
                )
        logger.info(
            "question_preload_completed",
            technologies=list(distinct),
            failed=failed,
        )

    def evict_expired(self) -> list[str]:
        return self._cache.evict_expired()


def _bank_fallback(technology: str, count: int) -> Sequence[Question]:
    return static_bank.questions_for(technology, count * 2)


def build_question_pipeline(
    settings: Settings | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    cache: QuestionCache | None = None,
) -> QuestionSourcingPipeline:
    settings = settings or get_settings()
    quiz_api = QuizApiClient.from_settings(settings, client=client)
    return QuestionSourcingPipeline(
        cache=cache or QuestionCache(ttl_seconds=settings.question_cache_ttl_seconds),
        sources=(
            RemoteQuestionSource(quiz_api),
            LocalFallbackSource(),
            SyntheticQuestionSource(),
        ),
        preload_count=settings.question_preload_count,
        fallback_provider=_bank_fallback,
    )

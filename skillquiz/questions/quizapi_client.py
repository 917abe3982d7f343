from __future__ import annotations

import asyncio
import html
from collections.abc import Callable, Mapping
from time import monotonic
from typing import Any

import httpx
import structlog

from skillquiz.core.config import Settings, get_settings
from skillquiz.questions.errors import (
    InvalidQuestionError,
    MalformedRecordError,
    SourceUnavailableError,
)
from skillquiz.questions.quizapi_tags import build_tag_table, parse_tag_overrides, resolve_quiz_api_tag
from skillquiz.questions.types import Difficulty, Question

logger = structlog.get_logger(__name__)

DEFAULT_QUIZ_API_URL = "https://quizapi.io/api/v1/questions"
PLACEHOLDER_API_KEYS = frozenset({"", "YOUR_API_KEY", "demo-key"})
ANSWER_LETTERS = ("a", "b", "c", "d", "e", "f")
DIFFICULTY_BY_PROVIDER_LEVEL = {
    "easy": Difficulty.BEGINNER,
    "medium": Difficulty.INTERMEDIATE,
    "hard": Difficulty.ADVANCED,
}


def is_api_key_configured(api_key: str | None) -> bool:
    return api_key is not None and api_key.strip() not in PLACEHOLDER_API_KEYS


def _clean_text(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    text = html.unescape(value).strip()
    return text or None


def _is_true_flag(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return isinstance(value, str) and value.strip().lower() == "true"


def _record_difficulty(raw_difficulty: object) -> Difficulty:
    if not isinstance(raw_difficulty, str):
        return Difficulty.INTERMEDIATE
    return DIFFICULTY_BY_PROVIDER_LEVEL.get(raw_difficulty.strip().lower(), Difficulty.INTERMEDIATE)


def _record_category(record: Mapping[str, Any]) -> str:
    tags = record.get("tags")
    if isinstance(tags, list):
        for tag in tags:
            name = _clean_text(tag.get("name")) if isinstance(tag, dict) else None
            if name:
                return name.lower()
    category = _clean_text(record.get("category"))
    return category.lower() if category else "general"


def normalize_quiz_api_record(
    record: object,
    *,
    technology: str,
    index: int,
) -> Question:
    if not isinstance(record, dict):
        raise MalformedRecordError("record is not an object")

    text = _clean_text(record.get("question"))
    if text is None:
        raise MalformedRecordError("record has no question text")

    answers = record.get("answers")
    correct_flags = record.get("correct_answers")
    if not isinstance(answers, dict) or not isinstance(correct_flags, dict):
        raise MalformedRecordError("record has no answer map")

    options: list[str] = []
    correct_positions: list[int] = []
    for letter in ANSWER_LETTERS:
        option = _clean_text(answers.get(f"answer_{letter}"))
        if option is None:
            continue
        if _is_true_flag(correct_flags.get(f"answer_{letter}_correct")):
            correct_positions.append(len(options))
        options.append(option)

    if len(correct_positions) != 1:
        raise MalformedRecordError(f"record has {len(correct_positions)} correct answers")

    provider_id = record.get("id")
    suffix = provider_id if isinstance(provider_id, (int, str)) and str(provider_id).strip() else index
    return Question(
        question_id=f"quizapi_{technology.strip().lower()}_{suffix}",
        technology=technology,
        text=text,
        options=tuple(options),
        correct_option=correct_positions[0],
        difficulty=_record_difficulty(record.get("difficulty")),
        category=_record_category(record),
    )


def normalize_quiz_api_payload(payload: object, *, technology: str) -> list[Question]:
    if not isinstance(payload, list) or not payload:
        raise SourceUnavailableError("quizapi returned no questions")

    questions: list[Question] = []
    seen_ids: set[str] = set()
    for index, record in enumerate(payload):
        try:
            question = normalize_quiz_api_record(record, technology=technology, index=index)
        except (MalformedRecordError, InvalidQuestionError) as exc:
            logger.info(
                "quizapi_record_dropped",
                technology=technology,
                record_index=index,
                reason=str(exc),
            )
            continue
        if question.question_id in seen_ids:
            continue
        seen_ids.add(question.question_id)
        questions.append(question)

    if not questions:
        raise SourceUnavailableError("quizapi returned no usable questions")
    return questions


class QuizApiClient:
    """Single-request adapter for the QuizAPI.io questions endpoint.

    Every failure surfaces as ``SourceUnavailableError``; the adapter never
    returns an empty list and never retries. ``ping`` results are reused for
    ``ping_cache_seconds`` so health probes do not spend the provider quota.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = DEFAULT_QUIZ_API_URL,
        category: str = "code",
        enabled: bool = True,
        request_delay_seconds: float = 0.5,
        max_limit: int = 20,
        timeout_seconds: float = 5.0,
        tag_table: Mapping[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
        ping_cache_seconds: float = 30.0,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        self._api_key = api_key.strip()
        self._base_url = base_url
        self._category = category
        self._enabled = enabled
        self._request_delay_seconds = max(0.0, request_delay_seconds)
        self._max_limit = max(1, max_limit)
        self._timeout_seconds = timeout_seconds
        self._tag_table = build_tag_table(tag_table)
        self._client = client
        self._ping_cache_seconds = max(0.0, ping_cache_seconds)
        self._clock = clock
        self._last_ping: tuple[float, bool] | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> "QuizApiClient":
        settings = settings or get_settings()
        return cls(
            api_key=settings.quiz_api_key,
            base_url=settings.quiz_api_url,
            category=settings.quiz_api_category,
            enabled=settings.quiz_api_enabled,
            request_delay_seconds=settings.quiz_api_request_delay_ms / 1000,
            max_limit=settings.quiz_api_max_limit,
            timeout_seconds=settings.quiz_api_timeout_seconds,
            tag_table=parse_tag_overrides(settings.quiz_api_tag_overrides_json),
            client=client,
            ping_cache_seconds=settings.quiz_api_ping_cache_seconds,
        )

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def is_configured(self) -> bool:
        return self._enabled and is_api_key_configured(self._api_key)

    def tag_for(self, technology: str) -> str:
        return resolve_quiz_api_tag(technology, self._tag_table)

    def build_params(self, technology: str, count: int) -> dict[str, str | int]:
        return {
            "apiKey": self._api_key,
            "category": self._category,
            "tags": self.tag_for(technology),
            "limit": max(1, min(count, self._max_limit)),
        }

    async def _get(self, params: Mapping[str, str | int]) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(self._base_url, params=params)
        async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
            return await client.get(self._base_url, params=params)

    async def fetch_questions(self, technology: str, count: int) -> list[Question]:
        if not self.is_configured:
            raise SourceUnavailableError("quizapi is disabled or has no api key")

        await asyncio.sleep(self._request_delay_seconds)

        params = self.build_params(technology, count)
        try:
            response = await self._get(params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "quizapi_request_failed",
                technology=technology,
                tag=params["tags"],
                status_code=exc.response.status_code,
            )
            raise SourceUnavailableError(f"quizapi http status {exc.response.status_code}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(
                "quizapi_request_failed",
                technology=technology,
                tag=params["tags"],
                error_type=type(exc).__name__,
            )
            raise SourceUnavailableError(f"quizapi request failed: {type(exc).__name__}") from exc

        questions = normalize_quiz_api_payload(payload, technology=technology)
        logger.info(
            "quizapi_questions_fetched",
            technology=technology,
            tag=params["tags"],
            requested=params["limit"],
            received=len(questions),
        )
        return questions

    async def ping(self) -> bool:
        if not self.is_configured:
            return False
        now = self._clock()
        if self._last_ping is not None and now - self._last_ping[0] < self._ping_cache_seconds:
            return self._last_ping[1]

        params = {"apiKey": self._api_key, "limit": 1}
        try:
            response = await self._get(params)
            reachable = response.is_success
        except httpx.HTTPError:
            logger.warning("quizapi_ping_failed")
            reachable = False
        self._last_ping = (now, reachable)
        return reachable

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from time import monotonic
from typing import Any

import structlog

from skillquiz.questions.types import Question, QuestionOrigin

logger = structlog.get_logger(__name__)

DEFAULT_CACHE_TTL_SECONDS = 3600

@dataclass(slots=True)
class CacheEntry:
    questions: tuple[Question, ...]
    fetched_at: float
    origin: QuestionOrigin

    def is_stale(self, *, now: float, ttl_seconds: float) -> bool:
        return now - self.fetched_at >= ttl_seconds

def clamp_cache_ttl_seconds(value: int) -> int:
    return max(1, min(DEFAULT_CACHE_TTL_SECONDS, int(value)))

def cache_key(technology: str) -> str:
    return technology.strip().lower()

class QuestionCache:
    """Per-technology question cache with a fixed TTL.

    Entries are replaced wholesale on every write. Stale entries stay in place
    until they are overwritten or removed by ``evict_expired``, but ``get``
    never returns them.
    """

    def __init__(
        self,
        *,
        ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        self._ttl_seconds = clamp_cache_ttl_seconds(ttl_seconds)
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, technology: str) -> CacheEntry | None:
        entry = self._entries.get(cache_key(technology))
        if entry is None or entry.is_stale(now=self._clock(), ttl_seconds=self._ttl_seconds):
            return None
        return entry

    def put(
        self,
        technology: str,
        questions: Sequence[Question],
        *,
        origin: QuestionOrigin,
    ) -> CacheEntry:
        if origin is QuestionOrigin.CACHE:
            raise ValueError("cache entries must record the source they were fetched from")
        entry = CacheEntry(
            questions=tuple(questions),
            fetched_at=self._clock(),
            origin=origin,
        )
        self._entries[cache_key(technology)] = entry
        logger.debug(
            "question_cache_stored",
            technology=cache_key(technology),
            question_count=len(entry.questions),
            origin=origin.value,
        )
        return entry

    def evict_expired(self) -> list[str]:
        now = self._clock()
        expired = [
            key
            for key, entry in self._entries.items()
            if entry.is_stale(now=now, ttl_seconds=self._ttl_seconds)
        ]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.info("question_cache_evicted", technologies=expired)
        return expired

    def snapshot(self) -> dict[str, dict[str, Any]]:
        now = self._clock()
        return {
            key: {
                "question_count": len(entry.questions),
                "origin": entry.origin.value,
                "age_seconds": round(now - entry.fetched_at, 3),
                "stale": entry.is_stale(now=now, ttl_seconds=self._ttl_seconds),
            }
            for key, entry in sorted(self._entries.items())
        }

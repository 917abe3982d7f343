from __future__ import annotations

import pytest

from skillquiz.questions.cache import QuestionCache, clamp_cache_ttl_seconds
from skillquiz.questions.types import QuestionOrigin
from tests.questions.question_fixtures import FakeClock, make_question


def test_get_returns_fresh_entry_case_insensitively() -> None:
    clock = FakeClock()
    cache = QuestionCache(clock=clock)
    cache.put("React", [make_question("q1")], origin=QuestionOrigin.REMOTE)

    entry = cache.get("  react ")

    assert entry is not None
    assert entry.origin is QuestionOrigin.REMOTE
    assert [question.question_id for question in entry.questions] == ["q1"]


def test_entry_is_stale_once_ttl_elapsed() -> None:
    clock = FakeClock()
    cache = QuestionCache(ttl_seconds=60, clock=clock)
    cache.put("go", [make_question("q1")], origin=QuestionOrigin.LOCAL)

    clock.advance(59.9)
    assert cache.get("go") is not None

    clock.advance(0.1)
    assert cache.get("go") is None
    assert len(cache) == 1


def test_put_overwrites_whole_entry() -> None:
    cache = QuestionCache(clock=FakeClock())
    cache.put("java", [make_question("a"), make_question("b")], origin=QuestionOrigin.REMOTE)
    cache.put("java", [make_question("c")], origin=QuestionOrigin.SYNTHETIC)

    entry = cache.get("java")

    assert entry is not None
    assert entry.origin is QuestionOrigin.SYNTHETIC
    assert [question.question_id for question in entry.questions] == ["c"]


def test_put_rejects_cache_origin() -> None:
    cache = QuestionCache(clock=FakeClock())

    with pytest.raises(ValueError):
        cache.put("java", [make_question("a")], origin=QuestionOrigin.CACHE)


def test_evict_expired_removes_only_stale_entries() -> None:
    clock = FakeClock()
    cache = QuestionCache(ttl_seconds=100, clock=clock)
    cache.put("react", [make_question("r")], origin=QuestionOrigin.REMOTE)
    clock.advance(50)
    cache.put("python", [make_question("p")], origin=QuestionOrigin.LOCAL)
    clock.advance(50)

    evicted = cache.evict_expired()

    assert evicted == ["react"]
    assert len(cache) == 1
    assert cache.get("python") is not None


def test_snapshot_reports_age_and_staleness() -> None:
    clock = FakeClock()
    cache = QuestionCache(ttl_seconds=10, clock=clock)
    cache.put("rust", [make_question("r1"), make_question("r2")], origin=QuestionOrigin.SYNTHETIC)
    clock.advance(12)

    snapshot = cache.snapshot()

    assert snapshot == {
        "rust": {
            "question_count": 2,
            "origin": "synthetic",
            "age_seconds": 12.0,
            "stale": True,
        }
    }


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(0, 1), (-5, 1), (30, 30), (3600, 3600), (99999, 3600)],
)
def test_clamp_cache_ttl_seconds(raw: int, expected: int) -> None:
    assert clamp_cache_ttl_seconds(raw) == expected

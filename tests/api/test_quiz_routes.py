from __future__ import annotations

from types import SimpleNamespace

from fastapi.testclient import TestClient

from skillquiz.main import create_app
from skillquiz.questions.cache import QuestionCache
from skillquiz.questions.pipeline import QuestionSourcingPipeline
from tests.questions.question_fixtures import FakeClock, QuizApiStub, build_pipeline, quizapi_record


def _settings() -> SimpleNamespace:
    return SimpleNamespace(
        log_level="INFO",
        app_env="test",
        question_cache_eviction_interval_seconds=300,
    )


def _client(pipeline: QuestionSourcingPipeline) -> TestClient:
    return TestClient(create_app(_settings(), pipeline=pipeline))  # type: ignore[arg-type]


def test_questions_for_unknown_technology_are_synthetic() -> None:
    client = _client(build_pipeline(api_key=""))

    response = client.get("/quiz/questions", params={"technology": "unknown-tech-xyz", "count": 3})

    assert response.status_code == 200
    payload = response.json()
    assert payload["technology"] == "unknown-tech-xyz"
    assert payload["source"] == "synthetic"
    assert len(payload["questions"]) == 3
    assert all("unknown-tech-xyz" in question["text"] for question in payload["questions"])


def test_questions_fall_back_to_bank_then_serve_from_cache() -> None:
    client = _client(build_pipeline(api_key=""))

    first = client.get("/quiz/questions", params={"technology": "python", "count": 2})
    second = client.get("/quiz/questions", params={"technology": "Python", "count": 2})

    assert first.json()["source"] == "local"
    assert second.json()["source"] == "cache"
    assert [question["question_id"] for question in first.json()["questions"]] == [
        question["question_id"] for question in second.json()["questions"]
    ]


def test_questions_from_remote_provider() -> None:
    stub = QuizApiStub.returning([quizapi_record(index) for index in range(1, 4)])
    client = _client(build_pipeline(stub))

    response = client.get("/quiz/questions", params={"technology": "python"})

    payload = response.json()
    assert payload["source"] == "remote"
    assert [question["question_id"] for question in payload["questions"]] == [
        "quizapi_python_1",
        "quizapi_python_2",
        "quizapi_python_3",
    ]
    assert payload["questions"][0]["options"] == ["1", "2", "3"]
    assert payload["questions"][0]["correct_option"] == 1
    assert payload["questions"][0]["difficulty"] == "beginner"


def test_questions_validate_query() -> None:
    client = _client(build_pipeline(api_key=""))

    assert client.get("/quiz/questions", params={"technology": "python", "count": 0}).status_code == 422
    assert client.get("/quiz/questions", params={"technology": "python", "count": 51}).status_code == 422
    assert client.get("/quiz/questions", params={"technology": "   "}).status_code == 422
    assert client.get("/quiz/questions").status_code == 422


def test_preload_then_status_reports_cache() -> None:
    client = _client(build_pipeline(api_key=""))

    preload = client.post("/quiz/preload", json={"technologies": [" react ", "go", ""]})
    status = client.get("/quiz/status")

    assert preload.status_code == 200
    assert preload.json() == {"status": "ok", "technologies": ["react", "go"]}
    payload = status.json()
    assert payload["quiz_api"] == {"enabled": True, "configured": False}
    assert sorted(payload["cache"]) == ["go", "react"]
    assert payload["cache"]["react"]["stale"] is False
    assert payload["local"]["cached"] == 2


def test_evict_removes_only_stale_entries() -> None:
    clock = FakeClock()
    client = _client(build_pipeline(api_key="", clock=clock))
    client.get("/quiz/questions", params={"technology": "rust"})
    clock.advance(1800)
    client.get("/quiz/questions", params={"technology": "sql"})
    clock.advance(1800)

    response = client.post("/quiz/cache/evict")

    assert response.status_code == 200
    assert response.json() == {"evicted": ["rust"]}


def test_assemble_quiz_returns_questions_per_technology() -> None:
    client = _client(build_pipeline(api_key=""))

    response = client.post("/quiz/assemble", json={"technologies": ["react", "sql"], "per_technology": 2})

    assert response.status_code == 200
    questions = response.json()["questions"]
    assert len(questions) == 4
    assert {question["technology"] for question in questions} == {"react", "sql"}


def test_assemble_quiz_rejects_empty_technologies() -> None:
    client = _client(build_pipeline(api_key=""))

    response = client.post("/quiz/assemble", json={"technologies": []})

    assert response.status_code == 422


def test_lifespan_starts_and_stops_eviction_worker() -> None:
    app = create_app(_settings(), pipeline=build_pipeline(api_key=""))  # type: ignore[arg-type]

    with TestClient(app) as client:
        response = client.get("/live")

    assert response.status_code == 200


def test_availability_reports_bank_and_generated_technologies() -> None:
    pipeline = build_pipeline(api_key="")
    client = _client(pipeline)

    bank = client.get("/quiz/availability", params={"technology": " Python "})
    generated = client.get("/quiz/availability", params={"technology": "unknown-tech-xyz"})

    assert bank.json() == {"technology": "Python", "available": True}
    assert generated.json() == {"technology": "unknown-tech-xyz", "available": True}
    assert sorted(pipeline.cache.snapshot()) == ["unknown-tech-xyz"]


def test_availability_is_false_when_no_source_yields() -> None:
    pipeline = QuestionSourcingPipeline(cache=QuestionCache(clock=FakeClock()), sources=())
    client = _client(pipeline)

    response = client.get("/quiz/availability", params={"technology": "cobol"})

    assert response.status_code == 200
    assert response.json() == {"technology": "cobol", "available": False}
    assert client.get("/quiz/availability", params={"technology": "  "}).status_code == 422

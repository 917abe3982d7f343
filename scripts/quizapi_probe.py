from __future__ import annotations

import argparse
import asyncio

from skillquiz.core.config import get_settings
from skillquiz.questions.errors import SourceUnavailableError
from skillquiz.questions.quizapi_client import QuizApiClient


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch a few QuizAPI questions and report what came back.")
    parser.add_argument("technology", nargs="?", default="python")
    parser.add_argument("--count", type=int, default=3)
    return parser.parse_args()


async def _run(technology: str, count: int) -> int:
    client = QuizApiClient.from_settings(get_settings())
    if not client.is_configured:
        print("quizapi_probe skipped: QUIZ_API_KEY is not configured or the API is disabled")  # noqa: T201
        return 1

    print(f"quizapi_probe technology={technology} tag={client.tag_for(technology)}")  # noqa: T201
    try:
        questions = await client.fetch_questions(technology, count)
    except SourceUnavailableError as exc:
        print(f"quizapi_probe failed: {exc}")  # noqa: T201
        return 1

    for question in questions:
        print(f"- [{question.difficulty.value}] {question.text} -> {question.correct_answer}")  # noqa: T201
    print(f"quizapi_probe total={len(questions)}")  # noqa: T201
    return 0


def main() -> int:
    args = _parse_args()
    return asyncio.run(_run(args.technology, args.count))


if __name__ == "__main__":
    raise SystemExit(main())

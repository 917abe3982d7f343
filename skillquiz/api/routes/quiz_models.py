from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from skillquiz.questions.types import Question


class QuestionPayload(BaseModel):
    question_id: str
    technology: str
    text: str
    options: list[str] = Field(min_length=2)
    correct_option: int = Field(ge=0)
    difficulty: str
    category: str

    @classmethod
    def from_question(cls, question: Question) -> "QuestionPayload":
        return cls(
            question_id=question.question_id,
            technology=question.technology,
            text=question.text,
            options=list(question.options),
            correct_option=question.correct_option,
            difficulty=question.difficulty.value,
            category=question.category,
        )


class QuestionBatchResponse(BaseModel):
    technology: str
    source: str | None
    questions: list[QuestionPayload]


class AssembleQuizRequest(BaseModel):
    technologies: list[str] = Field(min_length=1, max_length=20)
    per_technology: int = Field(default=3, ge=1, le=20)


class AssembleQuizResponse(BaseModel):
    questions: list[QuestionPayload]


class PreloadRequest(BaseModel):
    technologies: list[str] = Field(min_length=1, max_length=20)


class PreloadResponse(BaseModel):
    status: str
    technologies: list[str]


class EvictResponse(BaseModel):
    evicted: list[str]


class QuizStatusResponse(BaseModel):
    quiz_api: dict[str, Any]
    cache: dict[str, dict[str, Any]]
    local: dict[str, Any]


class AvailabilityResponse(BaseModel):
    technology: str
    available: bool

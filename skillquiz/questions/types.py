from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from skillquiz.questions.errors import InvalidQuestionError


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class QuestionOrigin(str, Enum):
    CACHE = "cache"
    REMOTE = "remote"
    LOCAL = "local"
    SYNTHETIC = "synthetic"


@dataclass(frozen=True, slots=True)
class Question:
    question_id: str
    technology: str
    text: str
    options: tuple[str, ...]
    correct_option: int
    difficulty: Difficulty = Difficulty.INTERMEDIATE
    category: str = "general"

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", tuple(self.options))
        if len(self.options) < 2:
            raise InvalidQuestionError(f"question {self.question_id!r} needs at least two options")
        if isinstance(self.correct_option, bool) or not isinstance(self.correct_option, int):
            raise InvalidQuestionError(f"question {self.question_id!r} has a non-integer correct option")
        if not 0 <= self.correct_option < len(self.options):
            raise InvalidQuestionError(
                f"question {self.question_id!r} correct option {self.correct_option} "
                f"is outside 0..{len(self.options) - 1}"
            )

    @property
    def correct_answer(self) -> str:
        return self.options[self.correct_option]


@dataclass(frozen=True, slots=True)
class QuestionRequest:
    technology: str
    count: int
    local_fallback: tuple[Question, ...] = ()


@dataclass(frozen=True, slots=True)
class QuestionBatch:
    questions: tuple[Question, ...]
    origin: QuestionOrigin | None

from __future__ import annotations

from typing import NamedTuple

import structlog

from skillquiz.questions.types import Difficulty, Question

logger = structlog.get_logger(__name__)


class _Template(NamedTuple):
    text: str
    options: tuple[str, ...]
    correct_option: int
    difficulty: Difficulty
    category: str


_REACT_TEMPLATES: tuple[_Template, ...] = (
    _Template(
        text="What is the purpose of React.StrictMode?",
        options=(
            "To make React faster",
            "To help identify problems in development",
            "To add strict typing",
            "To prevent errors in production",
        ),
        correct_option=1,
        difficulty=Difficulty.INTERMEDIATE,
        category="debugging",
    ),
    _Template(
        text="What is the difference between controlled and uncontrolled components?",
        options=(
            "No difference",
            "Controlled components manage their own state",
            "Uncontrolled components have form data handled by React",
            "Controlled components have form data handled by React",
        ),
        correct_option=3,
        difficulty=Difficulty.INTERMEDIATE,
        category="forms",
    ),
    _Template(
        text="What are React Portals used for?",
        options=(
            "Creating new React apps",
            "Rendering children into DOM nodes outside parent component",
            "Managing state",
            "Handling events",
        ),
        correct_option=1,
        difficulty=Difficulty.ADVANCED,
        category="advanced",
    ),
)


_JAVASCRIPT_TEMPLATES: tuple[_Template, ...] = (
    _Template(
        text="What is the Event Loop in JavaScript?",
        options=(
            "A loop that handles events",
            "Mechanism that handles async operations",
            "A way to create loops",
            "A debugging tool",
        ),
        correct_option=1,
        difficulty=Difficulty.ADVANCED,
        category="async",
    ),
    _Template(
        text="What is the difference between Map and Object?",
        options=(
            "No difference",
            "Map can have any key type, Object keys are strings",
            "Object can have any key type, Map keys are strings",
            "They are exactly the same",
        ),
        correct_option=1,
        difficulty=Difficulty.INTERMEDIATE,
        category="data_structures",
    ),
    _Template(
        text="What is a WeakMap?",
        options=(
            "A Map with weak references to keys",
            "A smaller version of Map",
            "A Map that can be garbage collected",
            "A Map with limited functionality",
        ),
        correct_option=0,
        difficulty=Difficulty.ADVANCED,
        category="memory",
    ),
)


_JAVA_TEMPLATES: tuple[_Template, ...] = (
    _Template(
        text="What is the difference between String, StringBuilder, and StringBuffer?",
        options=(
            "No difference",
            "String is immutable, StringBuilder is mutable and not thread-safe, "
            "StringBuffer is mutable and thread-safe",
            "All are mutable",
            "All are immutable",
        ),
        correct_option=1,
        difficulty=Difficulty.INTERMEDIATE,
        category="strings",
    ),
    _Template(
        text="What is the Java Memory Model?",
        options=(
            "How Java manages memory",
            "Specification for thread interaction through memory",
            "Memory allocation algorithm",
            "Garbage collection process",
        ),
        correct_option=1,
        difficulty=Difficulty.ADVANCED,
        category="memory",
    ),
    _Template(
        text="What is the purpose of the volatile keyword?",
        options=(
            "Makes variables final",
            "Ensures visibility of variable changes across threads",
            "Makes variables static",
            "Prevents garbage collection",
        ),
        correct_option=1,
        difficulty=Difficulty.ADVANCED,
        category="threading",
    ),
)


_PYTHON_TEMPLATES: tuple[_Template, ...] = (
    _Template(
        text="What is the Global Interpreter Lock (GIL)?",
        options=(
            "A lock for global variables",
            "Mechanism that prevents multiple threads from executing Python bytecode at once",
            "A security feature",
            "A debugging tool",
        ),
        correct_option=1,
        difficulty=Difficulty.ADVANCED,
        category="threading",
    ),
    _Template(
        text="What is the difference between is and == operators?",
        options=(
            "No difference",
            "is checks identity, == checks equality",
            "== checks identity, is checks equality",
            "is is faster than ==",
        ),
        correct_option=1,
        difficulty=Difficulty.INTERMEDIATE,
        category="operators",
    ),
    _Template(
        text="What are context managers in Python?",
        options=(
            "Objects that define runtime context for executing code blocks",
            "Memory managers",
            "Thread managers",
            "Process managers",
        ),
        correct_option=0,
        difficulty=Difficulty.INTERMEDIATE,
        category="context",
    ),
)


_EXPRESS_TEMPLATES: tuple[_Template, ...] = (
    _Template(
        text="What is the difference between app.use() and app.get() in Express?",
        options=(
            "app.use() is for middleware, app.get() is for GET routes",
            "No difference",
            "app.use() is for routes, app.get() is for middleware",
            "Both are the same",
        ),
        correct_option=0,
        difficulty=Difficulty.INTERMEDIATE,
        category="middleware",
    ),
    _Template(
        text="What is the purpose of Express Router?",
        options=(
            "To create modular, mountable route handlers",
            "To connect to databases",
            "To render templates",
            "To serve static files only",
        ),
        correct_option=0,
        difficulty=Difficulty.INTERMEDIATE,
        category="routing",
    ),
)


_GO_TEMPLATES: tuple[_Template, ...] = (
    _Template(
        text="What makes Go concurrency unique?",
        options=("Goroutines and channels", "Thread pools", "Async/await", "Event loops"),
        correct_option=0,
        difficulty=Difficulty.INTERMEDIATE,
        category="concurrency",
    ),
    _Template(
        text="What is the zero value in Go?",
        options=(
            "Default value of uninitialized variables",
            "Null pointer",
            "Empty string",
            "Zero number",
        ),
        correct_option=0,
        difficulty=Difficulty.INTERMEDIATE,
        category="basics",
    ),
    _Template(
        text="How does Go handle memory management?",
        options=(
            "Manual memory management",
            "Garbage collection",
            "Reference counting",
            "Stack allocation only",
        ),
        correct_option=1,
        difficulty=Difficulty.INTERMEDIATE,
        category="memory",
    ),
)


_RUST_TEMPLATES: tuple[_Template, ...] = (
    _Template(
        text="What is the borrow checker in Rust?",
        options=("Memory safety mechanism", "Library manager", "Code formatter", "Testing tool"),
        correct_option=0,
        difficulty=Difficulty.INTERMEDIATE,
        category="safety",
    ),
    _Template(
        text="What are traits in Rust?",
        options=(
            "Similar to interfaces in other languages",
            "Data structures",
            "Memory allocators",
            "Compiler flags",
        ),
        correct_option=0,
        difficulty=Difficulty.INTERMEDIATE,
        category="traits",
    ),
    _Template(
        text="What is Cargo in Rust?",
        options=(
            "Package manager and build system",
            "Memory allocator",
            "Runtime environment",
            "Testing framework",
        ),
        correct_option=0,
        difficulty=Difficulty.BEGINNER,
        category="tools",
    ),
)


_SQL_TEMPLATES: tuple[_Template, ...] = (
    _Template(
        text="What is the difference between INNER JOIN and LEFT JOIN?",
        options=(
            "No difference",
            "INNER JOIN returns only matching rows, LEFT JOIN includes all left table rows",
            "LEFT JOIN returns only matching rows, INNER JOIN includes all left table rows",
            "Both return all rows",
        ),
        correct_option=1,
        difficulty=Difficulty.INTERMEDIATE,
        category="joins",
    ),
    _Template(
        text="What is a database index?",
        options=(
            "Data structure that improves query performance",
            "Primary key constraint",
            "Foreign key reference",
            "Table column order",
        ),
        correct_option=0,
        difficulty=Difficulty.INTERMEDIATE,
        category="indexing",
    ),
    _Template(
        text="How do you prevent SQL injection?",
        options=(
            "Use parameterized queries and input validation",
            "Use stored procedures only",
            "Encrypt all data",
            "Use NoSQL databases",
        ),
        correct_option=0,
        difficulty=Difficulty.ADVANCED,
        category="security",
    ),
)


_TEMPLATES_BY_TECHNOLOGY: dict[str, tuple[_Template, ...]] = {
    "react": _REACT_TEMPLATES,
    "javascript": _JAVASCRIPT_TEMPLATES,
    "java": _JAVA_TEMPLATES,
    "python": _PYTHON_TEMPLATES,
    "expressjs": _EXPRESS_TEMPLATES,
    "express": _EXPRESS_TEMPLATES,
    "go": _GO_TEMPLATES,
    "golang": _GO_TEMPLATES,
    "rust": _RUST_TEMPLATES,
    "sql": _SQL_TEMPLATES,
}

_GENERIC_PROMPTS: tuple[tuple[str, str], ...] = (
    ("What is a key concept in {technology}?", "basics"),
    ("Which practice matters most when working with {technology}?", "best-practices"),
    ("What should you learn first about {technology}?", "fundamentals"),
)


def has_synthetic_templates(technology: str) -> bool:
    return technology.strip().lower() in _TEMPLATES_BY_TECHNOLOGY


def _generic_question(technology: str, *, key: str, number: int) -> Question:
    prompt, category = _GENERIC_PROMPTS[(number - 1) % len(_GENERIC_PROMPTS)]
    answer = f"{technology} fundamentals"
    distractors = (
        f"Basic {technology} knowledge",
        f"{technology} best practices",
        f"Advanced {technology} concepts",
    )
    correct_option = (number - 1) % (len(distractors) + 1)
    options = list(distractors)
    options.insert(correct_option, answer)
    return Question(
        question_id=f"synthetic_{key}_{number}",
        technology=technology,
        text=prompt.format(technology=technology),
        options=tuple(options),
        correct_option=correct_option,
        difficulty=Difficulty.INTERMEDIATE,
        category=category,
    )


def generate_synthetic_questions(technology: str, count: int) -> list[Question]:
    if count < 1:
        return []

    display_name = technology.strip()
    key = display_name.lower()
    questions = [
        Question(
            question_id=f"synthetic_{key}_{number}",
            technology=display_name,
            text=template.text,
            options=template.options,
            correct_option=template.correct_option,
            difficulty=template.difficulty,
            category=template.category,
        )
        for number, template in enumerate(_TEMPLATES_BY_TECHNOLOGY.get(key, ())[:count], start=1)
    ]
    while len(questions) < count:
        questions.append(_generic_question(display_name, key=key, number=len(questions) + 1))

    logger.info(
        "synthetic_questions_generated",
        technology=key,
        question_count=len(questions),
        templated=has_synthetic_templates(key),
    )
    return questions

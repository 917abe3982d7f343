from __future__ import annotations

import random
from collections.abc import Sequence

from skillquiz.questions.types import Difficulty, Question

_B = Difficulty.BEGINNER
_I = Difficulty.INTERMEDIATE
_A = Difficulty.ADVANCED

def _q(
    question_id: str,
    technology: str,
    text: str,
    options: tuple[str, ...],
    correct_option: int,
    difficulty: Difficulty,
    category: str,
) -> Question:
    return Question(
        question_id=question_id,
        technology=technology,
        text=text,
        options=options,
        correct_option=correct_option,
        difficulty=difficulty,
        category=category,
    )

_QUESTION_BANK: tuple[Question, ...] = (
    _q(
        "react_1",
        "react",
        "What is JSX in React?",
        ("JavaScript XML", "JavaScript Extension", "Java Syntax Extension", "JavaScript Executable"),
        0,
        _B,
        "basics",
    ),
    _q(
        "react_2",
        "react",
        "Which hook is used to manage state in functional components?",
        ("useEffect", "useState", "useContext", "useReducer"),
        1,
        _B,
        "hooks",
    ),
    _q(
        "react_3",
        "react",
        "What is the virtual DOM?",
        ("A copy of the real DOM", "A JavaScript representation of the real DOM", "A database", "A server"),
        1,
        _I,
        "concepts",
    ),
    _q(
        "react_4",
        "react",
        "What does useEffect hook do?",
        ("Manages state", "Handles side effects", "Creates components", "Manages props"),
        1,
        _I,
        "hooks",
    ),
    _q(
        "react_6",
        "react",
        "What is React.memo used for?",
        ("Memory management", "Memoizing components", "Creating memos", "State management"),
        1,
        _A,
        "optimization",
    ),
    _q(
        "js_1",
        "javascript",
        "What is the difference between let and var?",
        (
            "No difference",
            "let has block scope, var has function scope",
            "var has block scope, let has function scope",
            "Both have global scope",
        ),
        1,
        _I,
        "variables",
    ),
    _q(
        "js_2",
        "javascript",
        "What is a closure in JavaScript?",
        (
            "A function that returns another function",
            "A function with access to outer scope",
            "A closed function",
            "A private function",
        ),
        1,
        _I,
        "functions",
    ),
    _q(
        "js_3",
        "javascript",
        'What does "this" keyword refer to?',
        ("Current object", "Global object", "Function object", "Depends on context"),
        3,
        _I,
        "concepts",
    ),
    _q(
        "node_1",
        "nodejs",
        "What is Node.js?",
        ("A JavaScript library", "A JavaScript runtime", "A database", "A web server"),
        1,
        _B,
        "basics",
    ),
    _q(
        "node_2",
        "nodejs",
        "What is npm?",
        ("Node Package Manager", "Node Project Manager", "New Package Manager", "Node Program Manager"),
        0,
        _B,
        "basics",
    ),
    _q(
        "node_3",
        "nodejs",
        "What is the event loop?",
        ("A loop for events", "JavaScript runtime execution model", "A database loop", "A server loop"),
        1,
        _I,
        "concepts",
    ),
    _q(
        "express_1",
        "expressjs",
        "What is Express.js?",
        ("A Node.js web framework", "A database", "A frontend library", "A testing tool"),
        0,
        _B,
        "basics",
    ),
    _q(
        "express_2",
        "expressjs",
        "What is middleware in Express.js?",
        (
            "Functions that execute during request-response cycle",
            "Database functions",
            "Client functions",
            "Browser functions",
        ),
        0,
        _I,
        "middleware",
    ),
    _q(
        "express_3",
        "expressjs",
        "How do you create a route in Express.js?",
        ('app.get("/path", handler)', 'app.route("/path")', 'app.create("/path")', 'app.path("/")'),
        0,
        _B,
        "routing",
    ),
    _q(
        "python_1",
        "python",
        "What is Python?",
        ("A snake", "A high-level programming language", "A database", "A web server"),
        1,
        _B,
        "basics",
    ),
    _q(
        "python_2",
        "python",
        "What is PEP 8?",
        ("Python Enhancement Proposal 8", "Python style guide", "Both A and B", "Python version"),
        2,
        _B,
        "standards",
    ),
    _q(
        "python_3",
        "python",
        "What is the difference between list and tuple?",
        (
            "List is mutable, tuple is immutable",
            "No difference",
            "Tuple is mutable, list is immutable",
            "Both are immutable",
        ),
        0,
        _B,
        "data_types",
    ),
    _q(
        "python_4",
        "python",
        "What is a decorator?",
        ("A design pattern", "A function that modifies another function", "A class", "A module"),
        1,
        _I,
        "functions",
    ),
    _q(
        "ts_1",
        "typescript",
        "What is TypeScript?",
        ("A superset of JavaScript", "A new language", "A framework", "A library"),
        0,
        _B,
        "basics",
    ),
    _q(
        "ts_2",
        "typescript",
        "What is type annotation?",
        ("Adding types to variables", "Adding comments", "Adding notes", "Adding documentation"),
        0,
        _B,
        "types",
    ),
    _q(
        "ts_3",
        "typescript",
        "What is an interface?",
        ("A contract for objects", "A class", "A function", "A variable"),
        0,
        _I,
        "interfaces",
    ),
    _q(
        "java_1",
        "java",
        "Which keyword is used to inherit a class in Java?",
        ("implements", "extends", "inherits", "super"),
        1,
        _B,
        "oop",
    ),
    _q(
        "java_2",
        "java",
        "What does the JVM do?",
        ("Compiles Java source", "Executes Java bytecode", "Manages databases", "Edits code"),
        1,
        _B,
        "basics",
    ),
    _q(
        "sql_1",
        "sql",
        "Which SQL clause filters rows before grouping?",
        ("HAVING", "WHERE", "ORDER BY", "GROUP BY"),
        1,
        _B,
        "queries",
    ),
    _q(
        "sql_2",
        "sql",
        "What is a stored procedure?",
        (
            "Precompiled SQL code stored in database",
            "Backup procedure",
            "Installation process",
            "Data export method",
        ),
        0,
        _I,
        "procedures",
    ),
    _q(
        "go_1",
        "go",
        "Which keyword starts a goroutine?",
        ("async", "go", "spawn", "thread"),
        1,
        _B,
        "concurrency",
    ),
    _q(
        "go_2",
        "go",
        "How are errors usually reported in Go?",
        ("Exceptions", "Returned error values", "Global error codes", "Panics only"),
        1,
        _I,
        "errors",
    ),
    _q(
        "rust_1",
        "rust",
        "What does ownership guarantee in Rust?",
        ("Memory safety without a garbage collector", "Faster compilation", "Dynamic typing", "Reflection"),
        0,
        _I,
        "ownership",
    ),
    _q(
        "rust_2",
        "rust",
        "Which type represents an optional value in Rust?",
        ("Result", "Option", "Maybe", "Nullable"),
        1,
        _B,
        "types",
    ),
)

def shuffled(items: Sequence[Question], *, rng: random.Random | None = None) -> list[Question]:
    copied = list(items)
    (rng or random).shuffle(copied)
    return copied

def questions_for(
    technology: str,
    count: int = 3,
    *,
    shuffle: bool = True,
    rng: random.Random | None = None,
) -> list[Question]:
    key = technology.strip().lower()
    matching = [question for question in _QUESTION_BANK if question.technology == key]
    if shuffle:
        matching = shuffled(matching, rng=rng)
    return matching[: max(0, count)]

def has_questions(technology: str) -> bool:
    key = technology.strip().lower()
    return any(question.technology == key for question in _QUESTION_BANK)

def available_technologies() -> list[str]:
    return sorted({question.technology for question in _QUESTION_BANK})

def question_count() -> int:
    return len(_QUESTION_BANK)

from __future__ import annotations

import json
from collections.abc import Mapping

import structlog

logger = structlog.get_logger(__name__)

# QuizAPI tag names keyed by the technology ids the onboarding flow uses.
DEFAULT_QUIZ_API_TAGS: dict[str, str] = {
    "react": "React",
    "nodejs": "Node.js",
    "node.js": "Node.js",
    "expressjs": "Node.js",
    "express.js": "Node.js",
    "express": "Node.js",
    "vue": "Vue.js",
    "vuejs": "Vue.js",
    "angular": "Angular",
    "html": "HTML",
    "css": "CSS",
    "python": "Python",
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "java": "Java",
    "sql": "SQL",
    "mongodb": "MongoDB",
    "php": "PHP",
    "csharp": "C#",
    "cpp": "C++",
    "go": "Go",
    "golang": "Go",
    "rust": "Rust",
    "google-cloud": "Google Cloud Platform",
    "gcp": "Google Cloud Platform",
    "google-cloud-platform": "Google Cloud Platform",
}


def parse_tag_overrides(raw_overrides: str) -> dict[str, str]:
    if not raw_overrides.strip():
        return {}

    try:
        parsed = json.loads(raw_overrides)
    except json.JSONDecodeError:
        logger.warning("quizapi_tag_overrides_parse_failed")
        return {}
    if not isinstance(parsed, dict):
        logger.warning("quizapi_tag_overrides_not_object")
        return {}

    overrides: dict[str, str] = {}
    for technology, tag in parsed.items():
        if not isinstance(technology, str) or not isinstance(tag, str):
            continue
        key = technology.strip().lower()
        value = tag.strip()
        if key and value:
            overrides[key] = value
    return overrides


def build_tag_table(overrides: Mapping[str, str] | None = None) -> dict[str, str]:
    table = dict(DEFAULT_QUIZ_API_TAGS)
    if overrides:
        table.update({key.strip().lower(): value for key, value in overrides.items()})
    return table


def resolve_quiz_api_tag(technology: str, table: Mapping[str, str] | None = None) -> str:
    tags = DEFAULT_QUIZ_API_TAGS if table is None else table
    return tags.get(technology.strip().lower(), technology.strip())

from __future__ import annotations

import pytest

from skillquiz.questions.quizapi_tags import (
    DEFAULT_QUIZ_API_TAGS,
    build_tag_table,
    parse_tag_overrides,
    resolve_quiz_api_tag,
)


@pytest.mark.parametrize(
    ("technology", "expected"),
    [
        ("nodejs", "Node.js"),
        ("expressjs", "Node.js"),
        ("Express", "Node.js"),
        ("vuejs", "Vue.js"),
        ("GCP", "Google Cloud Platform"),
        ("  python ", "Python"),
    ],
)
def test_resolve_quiz_api_tag_uses_default_table(technology: str, expected: str) -> None:
    assert resolve_quiz_api_tag(technology) == expected


def test_resolve_quiz_api_tag_passes_unmapped_technology_through() -> None:
    assert resolve_quiz_api_tag("Svelte") == "Svelte"
    assert resolve_quiz_api_tag("unknown-tech-xyz") == "unknown-tech-xyz"


def test_parse_tag_overrides_normalizes_keys_and_skips_bad_values() -> None:
    overrides = parse_tag_overrides('{" Svelte ": "SvelteKit", "elixir": 3, "": "x", "deno": "  "}')

    assert overrides == {"svelte": "SvelteKit"}


@pytest.mark.parametrize("raw", ["", "   ", "{not json", "[1, 2]", '"text"'])
def test_parse_tag_overrides_ignores_invalid_input(raw: str) -> None:
    assert parse_tag_overrides(raw) == {}


def test_build_tag_table_merges_overrides_without_mutating_defaults() -> None:
    table = build_tag_table({"React": "ReactJS", "svelte": "SvelteKit"})

    assert table["react"] == "ReactJS"
    assert table["svelte"] == "SvelteKit"
    assert table["nodejs"] == "Node.js"
    assert DEFAULT_QUIZ_API_TAGS["react"] == "React"
    assert "svelte" not in DEFAULT_QUIZ_API_TAGS

"""Shared fixtures for Glint tests."""

from __future__ import annotations

import pytest

from glint.config import reset_tokenize_config
from glint.grammar import Grammar, Rule
from glint.languages import get_language


@pytest.fixture
def css() -> Grammar:
    """The built-in CSS grammar."""
    return get_language("css")


@pytest.fixture
def script_grammar() -> Grammar:
    """Small grammar mixing greedy, plain and lookbehind rules."""
    return Grammar(
        {
            "comment": r"#[^\n]*",
            "string": Rule(pattern=r'"[^"\n]*"', greedy=True),
            "keyword": r"\b(?:if|else|return)\b",
            "property": Rule(pattern=r"(\.)\w+", lookbehind=True),
            "word": r"\w+",
            "punctuation": r"[;,.(){}]",
        },
        name="script",
    )


@pytest.fixture(autouse=True)
def _reset_config() -> None:
    """Every test starts from the default tokenize config."""
    reset_tokenize_config()

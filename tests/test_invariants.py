"""Property-based tests for tokenizer invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from glint import tokenize
from glint.grammar import Grammar, Rule
from glint.languages import get_language
from glint.tokens import Token, iter_tokens, text_of

CSS = get_language("css")

SCRIPT = Grammar(
    {
        "comment": r"#[^\n]*",
        "string": Rule(pattern=r'"[^"\n]*"', greedy=True),
        "keyword": r"\b(?:if|else)\b",
        "property": Rule(pattern=r"(\.)\w+", lookbehind=True),
        "word": r"\w+",
        "punctuation": r"[;,.(){}]",
    }
)

css_text = st.text(alphabet='abc-@:;{}()"\' \n/*!,.url5', max_size=200)
script_text = st.text(alphabet='ab#"; ,.(){}\nif', max_size=200)


class TestCoverage:
    """Leaf text of the result reproduces the input exactly."""

    @given(st.text(max_size=300))
    @settings(max_examples=100)
    def test_css_any_text(self, source: str) -> None:
        assert text_of(tokenize(source, CSS)) == source

    @given(css_text)
    @settings(max_examples=200)
    def test_css_like_text(self, source: str) -> None:
        assert text_of(tokenize(source, CSS)) == source

    @given(script_text)
    @settings(max_examples=200)
    def test_greedy_grammar(self, source: str) -> None:
        assert text_of(tokenize(source, SCRIPT)) == source


class TestTokenShape:
    """Token bookkeeping is consistent at every nesting level."""

    @given(css_text)
    @settings(max_examples=100)
    def test_length_matches_content(self, source: str) -> None:
        for token in iter_tokens(tokenize(source, CSS)):
            assert token.length == len(text_of(token))
            assert token.length > 0

    @given(css_text)
    @settings(max_examples=100)
    def test_no_empty_plain_chunks(self, source: str) -> None:
        result = tokenize(source, CSS)
        assert all(chunk != "" for chunk in result)

    @given(script_text)
    @settings(max_examples=100)
    def test_category_is_alias_or_type(self, source: str) -> None:
        for token in iter_tokens(tokenize(source, SCRIPT)):
            assert token.category == (token.alias or token.type)


class TestDeterminism:
    """Tokenization is a pure function of (text, grammar)."""

    @given(css_text)
    @settings(max_examples=50)
    def test_repeated_tokenization_identical(self, source: str) -> None:
        assert tokenize(source, CSS) == tokenize(source, CSS)


class TestNoMatchFallback:
    """A grammar that claims nothing returns the input as one chunk."""

    @given(st.text(min_size=1, max_size=100))
    @settings(max_examples=50)
    def test_empty_grammar(self, source: str) -> None:
        assert tokenize(source, Grammar()) == (source,)

    @given(st.text(alphabet="abc", min_size=1, max_size=50))
    @settings(max_examples=50)
    def test_grammar_without_matches(self, source: str) -> None:
        result = tokenize(source, Grammar({"digit": r"\d"}))
        assert result == (source,)
        assert not any(isinstance(chunk, Token) for chunk in result)

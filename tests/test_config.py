"""Tests for ContextVar-based tokenize configuration.

Validates thread isolation, context manager behavior, and that nested
grammars share the ceilings of the top-level call.
"""

from threading import Thread

import pytest

from glint import (
    Grammar,
    RecursionLimitExceeded,
    TokenizeConfig,
    Tokenizer,
    get_tokenize_config,
    reset_tokenize_config,
    set_tokenize_config,
    tokenize,
    tokenize_config_context,
)
from glint.grammar import Rule


class TestTokenizeConfigDataclass:
    """Test TokenizeConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = TokenizeConfig()
        assert config.max_depth == 100
        assert config.max_steps is None
        assert config.timeout is None

    def test_immutability(self) -> None:
        config = TokenizeConfig()
        with pytest.raises(AttributeError):
            config.max_depth = 5  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = TokenizeConfig.from_dict({"max_steps": 50, "colour": "red"})
        assert config.max_steps == 50
        assert config.max_depth == 100

    def test_from_dict_empty(self) -> None:
        assert TokenizeConfig.from_dict({}) == TokenizeConfig()


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def teardown_method(self) -> None:
        reset_tokenize_config()

    def test_default_config(self) -> None:
        assert get_tokenize_config() == TokenizeConfig()

    def test_set_and_get(self) -> None:
        set_tokenize_config(TokenizeConfig(max_depth=7))
        assert get_tokenize_config().max_depth == 7

    def test_reset_restores_default(self) -> None:
        set_tokenize_config(TokenizeConfig(max_depth=7))
        reset_tokenize_config()
        assert get_tokenize_config().max_depth == 100

    def test_tokenizer_reads_context(self) -> None:
        set_tokenize_config(TokenizeConfig(max_steps=3))
        assert Tokenizer()._config.max_steps == 3

    def test_explicit_config_wins(self) -> None:
        set_tokenize_config(TokenizeConfig(max_steps=3))
        assert Tokenizer(TokenizeConfig(max_steps=9))._config.max_steps == 9


class TestTokenizeConfigContext:
    """Test tokenize_config_context context manager."""

    def test_context_sets_config(self) -> None:
        with tokenize_config_context(TokenizeConfig(timeout=1.0)):
            assert get_tokenize_config().timeout == 1.0
        assert get_tokenize_config().timeout is None

    def test_nested_contexts(self) -> None:
        with tokenize_config_context(TokenizeConfig(max_depth=10)):
            with tokenize_config_context(TokenizeConfig(max_steps=5)):
                assert get_tokenize_config().max_steps == 5
                assert get_tokenize_config().max_depth == 100
            assert get_tokenize_config().max_depth == 10
        assert get_tokenize_config() == TokenizeConfig()

    def test_context_restores_on_exception(self) -> None:
        with pytest.raises(ValueError, match="test"):
            with tokenize_config_context(TokenizeConfig(max_depth=10)):
                raise ValueError("test")
        assert get_tokenize_config().max_depth == 100

    def test_context_applies_to_tokenize(self) -> None:
        inner = Grammar({"digit": r"\d"})
        outer = Grammar({"group": Rule(pattern=r"\(\d\)", inside=inner)})
        with tokenize_config_context(TokenizeConfig(max_depth=1)):
            with pytest.raises(RecursionLimitExceeded):
                tokenize("(1)", outer)
        assert len(tokenize("(1)", outer)) == 1


class TestThreadIsolation:
    """Test thread-local configuration isolation."""

    def test_thread_isolation(self) -> None:
        results: dict[int, int] = {}

        def worker(thread_id: int, depth: int) -> None:
            set_tokenize_config(TokenizeConfig(max_depth=depth))
            results[thread_id] = Tokenizer()._config.max_depth

        threads = [Thread(target=worker, args=(i, 10 + i)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == {0: 10, 1: 11, 2: 12, 3: 13}
        assert get_tokenize_config().max_depth == 100

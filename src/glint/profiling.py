"""Glint TokenizeAccumulator: opt-in profiling for tokenization.

This module provides accumulated metrics during tokenization:
- Total elapsed time
- Source length and tokens produced
- Nested grammar calls, rematch passes and pattern attempts

Zero overhead when disabled (get_tokenize_accumulator() returns None).

Example:
    from glint import tokenize
    from glint.languages import get_language
    from glint.profiling import profiled_tokenize

    with profiled_tokenize() as metrics:
        tokens = tokenize("a { color: red }", get_language("css"))

    print(metrics.summary())
    # {"total_ms": 0.4, "tokenize_calls": 1, "source_length": 16, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class TokenizeAccumulator:
    """Accumulated metrics during tokenization.

    Attributes:
        start_time: Profiling start timestamp.
        tokenize_calls: Number of top-level tokenize() calls recorded.
        nested_calls: Number of nested grammar tokenizations.
        source_length: Total length of top-level sources tokenized.
        token_count: Number of tokens produced, nested included.
        rematch_passes: Number of rematch passes after multi-chunk merges.
        pattern_attempts: Number of pattern searches run.

    """

    start_time: float = field(default_factory=perf_counter)
    tokenize_calls: int = 0
    nested_calls: int = 0
    source_length: int = 0
    token_count: int = 0
    rematch_passes: int = 0
    pattern_attempts: int = 0

    def record_tokenize(self, source_length: int, *, nested: bool) -> None:
        """Record one tokenize() call.

        Args:
            source_length: Length of the text tokenized.
            nested: True for calls made for an ``inside`` grammar.

        """
        if nested:
            self.nested_calls += 1
        else:
            self.tokenize_calls += 1
            self.source_length += source_length

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of tokenize metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "tokenize_calls": self.tokenize_calls,
            "nested_calls": self.nested_calls,
            "source_length": self.source_length,
            "token_count": self.token_count,
            "rematch_passes": self.rematch_passes,
            "pattern_attempts": self.pattern_attempts,
        }


# Module-level ContextVar
_accumulator: ContextVar[TokenizeAccumulator | None] = ContextVar(
    "tokenize_accumulator",
    default=None,
)


def get_tokenize_accumulator() -> TokenizeAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_tokenize() -> Iterator[TokenizeAccumulator]:
    """Context manager for profiled tokenization.

    Creates a TokenizeAccumulator and makes it available via
    get_tokenize_accumulator() for the duration of the with block.

    Yields:
        TokenizeAccumulator that will be populated during tokenize calls.

    """
    acc = TokenizeAccumulator()
    token: Token[TokenizeAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)


__all__ = [
    "TokenizeAccumulator",
    "get_tokenize_accumulator",
    "profiled_tokenize",
]

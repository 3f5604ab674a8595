"""Exception classes for Glint.

Provides standardized exceptions for error handling throughout Glint.
Unmatched text is never an error: it stays in the output as plain chunks.
"""

from __future__ import annotations


class GlintError(Exception):
    """Base exception for all Glint errors.

    Subclass this for specific error categories.
    """

    pass


class InvalidGrammar(GlintError):
    """A grammar entry cannot be turned into rules.

    Raised during grammar resolution, before any text is scanned.
    """

    def __init__(self, type_name: str | None, message: str) -> None:
        """Initialize grammar error.

        Args:
            type_name: Token type whose entry is malformed (None for the
                grammar as a whole)
            message: Description of the problem
        """
        self.type_name = type_name
        prefix = f"Grammar entry {type_name!r}: " if type_name is not None else "Grammar: "
        super().__init__(f"{prefix}{message}")


class PatternEngineFailure(GlintError):
    """The regular expression engine rejected a rule's pattern."""

    def __init__(self, type_name: str, pattern: str, reason: str) -> None:
        """Initialize pattern failure.

        Args:
            type_name: Token type the pattern belongs to
            pattern: The offending pattern source
            reason: Message reported by the engine
        """
        self.type_name = type_name
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Pattern for {type_name!r} failed to compile: {reason} ({pattern!r})")


class ResourceExhausted(GlintError):
    """A tokenization exceeded one of its resource ceilings."""

    pass


class RecursionLimitExceeded(ResourceExhausted):
    """Nested grammar or rematch recursion went deeper than allowed."""

    def __init__(self, depth: int, limit: int, message: str | None = None) -> None:
        self.depth = depth
        self.limit = limit
        super().__init__(message or f"Recursion depth {depth} exceeds limit {limit}")


class BudgetExceeded(ResourceExhausted):
    """The step budget or the deadline of a tokenization ran out."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class SequenceOverrun(GlintError):
    """The working sequence holds more chunks than the input has characters.

    This only happens when a grammar produces empty matches over and over.
    It is fatal and never retried.
    """

    def __init__(self, chunk_count: int, text_length: int) -> None:
        self.chunk_count = chunk_count
        self.text_length = text_length
        super().__init__(
            f"Chunk sequence grew to {chunk_count} elements for {text_length} characters of input"
        )


__all__ = [
    "BudgetExceeded",
    "GlintError",
    "InvalidGrammar",
    "PatternEngineFailure",
    "RecursionLimitExceeded",
    "ResourceExhausted",
    "SequenceOverrun",
]

"""Token and Chunk definitions for the Glint tokenizer.

The tokenizer produces a tuple of chunks. A chunk is either a plain ``str``
(text no rule claimed) or a Token. A Token's content is either the raw
matched text or, when its rule declares a nested grammar, a tuple of chunks.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True, slots=True)
class Token:
    """A classified span of the input.

    Attributes:
        type: Token type name (the grammar key that produced it)
        content: Raw matched text, or nested chunks from an ``inside`` grammar
        alias: Optional display tag that overrides ``type`` for styling
        length: Number of input characters covered; always equals the
            length of the flattened content
        category: ``alias`` if present else ``type``, fixed at construction

    """

    type: str
    content: str | tuple[Chunk, ...]
    alias: str | None = None
    length: int = 0
    category: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "category", self.alias if self.alias is not None else self.type)

    @property
    def nested(self) -> bool:
        """True when content came from a nested grammar."""
        return not isinstance(self.content, str)

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        if isinstance(self.content, str):
            val = self.content
            if len(val) > 20:
                val = val[:17] + "..."
            shown = repr(val)
        else:
            shown = f"<{len(self.content)} chunks>"
        alias = f" as {self.alias}" if self.alias is not None else ""
        return f"Token({self.type}{alias}, {shown})"


Chunk = Union[str, Token]


def chunk_length(chunk: Chunk) -> int:
    """Number of input characters a chunk covers."""
    if isinstance(chunk, Token):
        return chunk.length
    return len(chunk)


def text_of(chunks: Chunk | Iterable[Chunk]) -> str:
    """Concatenate the leaf text of a chunk or a sequence of chunks.

    For any tokenizer result, ``text_of(tokenize(text, grammar)) == text``.
    """
    if isinstance(chunks, str):
        return chunks
    if isinstance(chunks, Token):
        return text_of(chunks.content)
    return "".join(text_of(chunk) for chunk in chunks)


def iter_tokens(chunks: Iterable[Chunk]) -> Iterator[Token]:
    """Yield every Token depth-first, parents before their nested tokens."""
    for chunk in chunks:
        if isinstance(chunk, Token):
            yield chunk
            if not isinstance(chunk.content, str):
                yield from iter_tokens(chunk.content)


__all__ = [
    "Chunk",
    "Token",
    "chunk_length",
    "iter_tokens",
    "text_of",
]

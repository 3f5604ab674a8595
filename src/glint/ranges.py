"""Highlight ranges from a token stream.

A display layer positions only the top-level chunks: it walks them
accumulating lengths into offsets and styles each Token by its category.
Plain text advances the offset and gets no range.

Example:
    >>> from glint import tokenize
    >>> from glint.languages import get_language
    >>> list(highlight_ranges(tokenize("a{}", get_language("css"))))
    [HighlightRange(start=0, end=1, category='selector'), HighlightRange(start=1, end=2, category='punctuation'), HighlightRange(start=2, end=3, category='punctuation')]

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from glint.tokens import Chunk, Token, chunk_length


@dataclass(frozen=True, slots=True)
class HighlightRange:
    """Half-open character range ``[start, end)`` with its display category."""

    start: int
    end: int
    category: str

    @property
    def length(self) -> int:
        return self.end - self.start


def highlight_ranges(chunks: Iterable[Chunk], *, offset: int = 0) -> Iterator[HighlightRange]:
    """Yield a range per top-level Token.

    Args:
        chunks: Tokenizer output
        offset: Offset of the first chunk in the host document

    Yields:
        HighlightRange for each Token, in document order
    """
    pos = offset
    for chunk in chunks:
        length = chunk_length(chunk)
        if isinstance(chunk, Token):
            yield HighlightRange(pos, pos + length, chunk.category)
        pos += length


__all__ = [
    "HighlightRange",
    "highlight_ranges",
]

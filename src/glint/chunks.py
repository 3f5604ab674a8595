"""Ordered chunk sequence used as the tokenizer's working buffer.

An arena of slots addressed by integer handles. Each slot stores a value
plus the handles of its neighbours; freed slots go on a free list and are
reused. Two sentinel slots bracket the live elements, so insertion after
any handle and removal of a run are O(1) and O(k) with no special cases.

Handles are plain ints, so there are no reference cycles to break.

Thread Safety:
ChunkList instances are local to one tokenize() call.
No shared mutable state.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from glint.tokens import Chunk

HEAD = 0
TAIL = 1


class ChunkList:
    """Doubly linked list of chunks backed by parallel arrays.

    Usage:
            >>> chunks = ChunkList()
            >>> node = chunks.insert_after(chunks.head, "a{b}")
            >>> chunks.insert_after(node, "c")
            3
            >>> chunks.to_tuple()
            ('a{b}', 'c')

    """

    __slots__ = ("_values", "_next", "_prev", "_free", "_length")

    def __init__(self) -> None:
        self._values: list[Chunk | None] = [None, None]
        self._next: list[int] = [TAIL, TAIL]
        self._prev: list[int] = [HEAD, HEAD]
        self._free: list[int] = []
        self._length = 0

    @property
    def head(self) -> int:
        return HEAD

    @property
    def tail(self) -> int:
        return TAIL

    def next(self, node: int) -> int:
        return self._next[node]

    def prev(self, node: int) -> int:
        return self._prev[node]

    def value(self, node: int) -> Chunk:
        value = self._values[node]
        if value is None:
            raise IndexError(f"Handle {node} is not a live element")
        return value

    def insert_after(self, node: int, value: Chunk) -> int:
        """Insert value immediately after node.

        Args:
            node: Handle of an existing element or the head sentinel
            value: Chunk to store

        Returns:
            Handle of the new element
        """
        following = self._next[node]

        if self._free:
            new = self._free.pop()
            self._values[new] = value
            self._next[new] = following
            self._prev[new] = node
        else:
            new = len(self._values)
            self._values.append(value)
            self._next.append(following)
            self._prev.append(node)

        self._next[node] = new
        self._prev[following] = new
        self._length += 1
        return new

    def remove_run(self, node: int, max_count: int) -> int:
        """Remove up to max_count elements following node.

        Stops early at the tail sentinel.

        Returns:
            Number of elements actually removed
        """
        current = self._next[node]
        removed = 0
        while removed < max_count and current != TAIL:
            following = self._next[current]
            self._values[current] = None
            self._free.append(current)
            current = following
            removed += 1

        self._next[node] = current
        self._prev[current] = node
        self._length -= removed
        return removed

    def to_tuple(self) -> tuple[Chunk, ...]:
        """Return the live values in order."""
        values: list[Chunk] = []
        node = self._next[HEAD]
        while node != TAIL:
            values.append(self._values[node])  # type: ignore[arg-type]
            node = self._next[node]
        return tuple(values)

    def __len__(self) -> int:
        """Return number of live elements (sentinels excluded)."""
        return self._length

    def __bool__(self) -> bool:
        return self._length > 0


__all__ = [
    "ChunkList",
    "HEAD",
    "TAIL",
]

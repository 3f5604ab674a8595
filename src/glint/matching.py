"""Single-pattern matching with lookbehind emulation.

Grammars are written for an engine without variable-width lookbehind, so a
rule that needs one captures the preceding context in group 1 and sets
``lookbehind``. The match is then reported as if that group had been a
zero-width assertion: the start moves past it and its text is dropped.

Thread Safety:
Pure function over compiled patterns. Safe to call from any thread.

"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PatternMatch:
    """A match reported by match_pattern().

    Attributes:
        index: Offset of the logical match start in the searched text
        text: Logical matched text (lookbehind prefix removed)
        groups: Capture groups as returned by the engine

    """

    index: int
    text: str
    groups: tuple[str | None, ...] = ()

    @property
    def end(self) -> int:
        return self.index + len(self.text)


def match_pattern(
    pattern: re.Pattern[str],
    pos: int,
    text: str,
    lookbehind: bool,
) -> PatternMatch | None:
    """Search text for pattern starting at pos.

    ``^`` keeps its meaning of "start of text": searching from a later pos
    does not make it match there.

    Args:
        pattern: Compiled pattern
        pos: Offset to start searching from
        text: Text to search
        lookbehind: Treat group 1 as a zero-width assertion

    Returns:
        PatternMatch or None
    """
    m = pattern.search(text, pos)
    if m is None:
        return None

    index = m.start()
    matched = m.group(0)
    if lookbehind and pattern.groups:
        prefix = m.group(1)
        if prefix:
            index += len(prefix)
            matched = matched[len(prefix):]
    return PatternMatch(index=index, text=matched, groups=m.groups())


__all__ = [
    "PatternMatch",
    "match_pattern",
]

"""Grammar and Rule definitions, plus one-time grammar resolution.

A Grammar is an ordered mapping from token type to one or more rules.
Order is priority: earlier entries are tried first at every position.
Values may be a pattern string, a compiled pattern, a Rule, or a sequence
of those (alternatives, tried in order).

A Grammar may name a fallback grammar in ``rest``. Resolution appends the
fallback's own entries after the local ones, exactly once, producing a flat
ResolvedGrammar. The fallback may point back at an enclosing grammar; since
only one level is merged and nested grammars are resolved lazily by
identity, the rule list stays finite.

Example:
    >>> css = Grammar({"comment": r"/\\*[\\s\\S]*?\\*/", "punctuation": r"[{};:]"})
    >>> inner = Grammar({"rule": r"^@[\\w-]+"}, rest=css)
    >>> [name for name, _ in resolve_grammar(inner).entries]
    ['rule', 'comment', 'punctuation']

Thread Safety:
Resolution runs under a module lock and publishes a complete, immutable
ResolvedGrammar in one attribute write. Concurrent first uses of the same
grammar resolve it once and never observe a partial result. The caller's
entries are never modified.

"""

from __future__ import annotations

import re
import threading
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Union

from glint.errors import InvalidGrammar, PatternEngineFailure
from glint.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Rule:
    """One pattern alternative plus its matching options.

    Attributes:
        pattern: Regular expression source or compiled pattern
        lookbehind: Group 1 is a zero-width assertion, excluded from the match
        greedy: Match against the whole text, across already split chunks
        inside: Nested grammar applied to the matched text
        alias: Display tag that overrides the token type

    """

    pattern: str | re.Pattern[str]
    lookbehind: bool = False
    greedy: bool = False
    inside: Grammar | None = None
    alias: str | None = None


RuleLike = Union[str, re.Pattern[str], Rule]
GrammarValue = Union[RuleLike, Sequence[RuleLike]]


@dataclass(frozen=True, slots=True)
class ResolvedGrammar:
    """A grammar flattened into compiled rules with no fallback reference.

    Attributes:
        entries: ``(type, rules)`` pairs in priority order; every rule's
            pattern is compiled
        name: Name of the grammar it was resolved from

    """

    entries: tuple[tuple[str, tuple[Rule, ...]], ...]
    name: str | None = None

    @property
    def types(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.entries)

    @property
    def rule_count(self) -> int:
        return sum(len(rules) for _, rules in self.entries)

    def __len__(self) -> int:
        return len(self.entries)


class Grammar:
    """Ordered token-type to rule mapping with an optional fallback.

    Entries are copied on construction and read-only afterwards. ``rest``
    stays assignable so self-referential grammars can be tied together
    after both sides exist:

        >>> css = Grammar({"punctuation": r"[{};:]"}, name="css")
        >>> atrule_inside = Grammar({"rule": r"^@[\\w-]+"})
        >>> atrule_inside.rest = css

    """

    __slots__ = ("_entries", "_rest", "_resolved", "name")

    def __init__(
        self,
        entries: Mapping[str, GrammarValue] | None = None,
        *,
        rest: Grammar | None = None,
        name: str | None = None,
    ) -> None:
        self._entries: dict[str, GrammarValue] = dict(entries or {})
        self._rest = rest
        self._resolved: ResolvedGrammar | None = None
        self.name = name

    @property
    def rest(self) -> Grammar | None:
        """Fallback grammar whose entries follow this grammar's own."""
        return self._rest

    @rest.setter
    def rest(self, value: Grammar | None) -> None:
        # Drops the cached resolution of this grammar only.
        with _resolve_lock:
            self._rest = value
            self._resolved = None

    @property
    def resolved(self) -> bool:
        return self._resolved is not None

    def items(self) -> Iterator[tuple[str, GrammarValue]]:
        return iter(self._entries.items())

    def __getitem__(self, type_name: str) -> GrammarValue:
        return self._entries[type_name]

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        label = f"{self.name!r}, " if self.name else ""
        rest = ", rest=..." if self._rest is not None else ""
        return f"Grammar({label}{list(self._entries)}{rest})"


_resolve_lock = threading.Lock()


def resolve_grammar(grammar: Grammar) -> ResolvedGrammar:
    """Resolve a grammar's fallback and compile its rules, once.

    Every grammar reachable through ``inside`` and ``rest`` is resolved in
    the same pass, so a defect anywhere in the tree is reported before any
    text is scanned. Nothing is published unless the whole pass succeeds.

    Args:
        grammar: Grammar to resolve

    Returns:
        The cached ResolvedGrammar (the identical object on every call)

    Raises:
        InvalidGrammar: An entry is not a pattern, Rule or sequence of them
        PatternEngineFailure: A pattern string does not compile
    """
    if not isinstance(grammar, Grammar):
        raise InvalidGrammar(None, f"expected a Grammar, got {type(grammar).__name__}")

    resolved = grammar._resolved
    if resolved is not None:
        return resolved

    with _resolve_lock:
        if grammar._resolved is not None:
            return grammar._resolved

        results: dict[int, tuple[Grammar, ResolvedGrammar]] = {}
        pending: list[Grammar] = [grammar]
        while pending:
            current = pending.pop()
            if id(current) in results:
                continue
            if current._resolved is not None:
                # Already published, so its whole reachable tree was too
                results[id(current)] = (current, current._resolved)
                continue

            result = _resolve_one(current)
            results[id(current)] = (current, result)
            if current._rest is not None:
                pending.append(current._rest)
            for _, rules in result.entries:
                for rule in rules:
                    if rule.inside is not None:
                        pending.append(rule.inside)

        for target, result in results.values():
            if target._resolved is None:
                target._resolved = result
                logger.debug(
                    "Resolved grammar %s: %d types, %d rules",
                    target.name or hex(id(target)),
                    len(result),
                    result.rule_count,
                )

        return grammar._resolved  # type: ignore[return-value]


def _resolve_one(grammar: Grammar) -> ResolvedGrammar:
    """Merge one level of fallback entries and compile every rule."""
    merged: dict[str, GrammarValue] = dict(grammar._entries)

    rest = grammar._rest
    if rest is not None:
        if not isinstance(rest, Grammar):
            raise InvalidGrammar(None, f"rest must be a Grammar, got {type(rest).__name__}")
        # A fallback type already declared locally replaces the local rules
        # at the local position.
        for type_name, value in rest._entries.items():
            merged[type_name] = value

    entries = tuple(
        (type_name, _normalize_entry(type_name, value)) for type_name, value in merged.items()
    )
    return ResolvedGrammar(entries=entries, name=grammar.name)


def _normalize_entry(type_name: str, value: object) -> tuple[Rule, ...]:
    if isinstance(value, (str, re.Pattern, Rule)):
        alternatives: tuple[object, ...] = (value,)
    elif isinstance(value, Sequence):
        alternatives = tuple(value)
    else:
        raise InvalidGrammar(
            type_name,
            f"expected a pattern, a Rule or a sequence of them, got {type(value).__name__}",
        )
    return tuple(_compile_rule(type_name, alternative) for alternative in alternatives)


def _compile_rule(type_name: str, value: object) -> Rule:
    if isinstance(value, (str, re.Pattern)):
        rule = Rule(pattern=value)
    elif isinstance(value, Rule):
        rule = value
    else:
        raise InvalidGrammar(
            type_name, f"alternative must be a pattern or a Rule, got {type(value).__name__}"
        )

    pattern = rule.pattern
    if pattern is None:
        raise InvalidGrammar(type_name, "rule has no pattern")
    if isinstance(pattern, str):
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            raise PatternEngineFailure(type_name, pattern, str(e)) from e
    elif isinstance(pattern, re.Pattern):
        if not isinstance(pattern.pattern, str):
            raise InvalidGrammar(type_name, "byte patterns cannot match text")
        compiled = pattern
    else:
        raise InvalidGrammar(
            type_name, f"pattern must be a string or compiled pattern, got {type(pattern).__name__}"
        )

    if rule.lookbehind and compiled.groups == 0:
        raise InvalidGrammar(type_name, "lookbehind rule needs a capture group")
    if rule.inside is not None and not isinstance(rule.inside, Grammar):
        raise InvalidGrammar(type_name, f"inside must be a Grammar, got {type(rule.inside).__name__}")

    if compiled is rule.pattern:
        return rule
    return replace(rule, pattern=compiled)


__all__ = [
    "Grammar",
    "GrammarValue",
    "ResolvedGrammar",
    "Rule",
    "RuleLike",
    "resolve_grammar",
]

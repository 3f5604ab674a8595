"""Grammar-driven tokenizer.

Turns text plus a Grammar into a gap-free tuple of chunks: Tokens for the
spans some rule claimed, plain strings for the rest. Concatenating the leaf
text of the result always reproduces the input.

Algorithm:
    The input starts as one plain chunk in a ChunkList. Each grammar entry,
    in priority order, walks the list left to right and tries its pattern
    on every plain chunk. A match splits the chunk into (before, token,
    after); tokens are never revisited at the same level.

    Greedy rules search the whole text instead of one chunk, so a match can
    span chunks that higher-priority rules already split apart. The covered
    run is replaced by a single token, then the same grammar is re-run over
    the merged region with the firing rule excluded, so lower-priority
    rules can still claim what follows it. ``reach`` stops that pass from
    scanning text that belongs to an unfinished outer match.

Thread Safety:
Tokenizer instances are single-use per tokenize() call and hold all
per-call state. Grammars are shared read-only; see glint.grammar.

"""

from __future__ import annotations

from time import perf_counter

from glint.chunks import ChunkList
from glint.config import TokenizeConfig, get_tokenize_config
from glint.errors import BudgetExceeded, RecursionLimitExceeded, SequenceOverrun
from glint.grammar import Grammar, ResolvedGrammar, Rule, resolve_grammar
from glint.matching import PatternMatch, match_pattern
from glint.profiling import TokenizeAccumulator, get_tokenize_accumulator
from glint.tokens import Chunk, Token, chunk_length
from glint.utils.logger import get_logger

logger = get_logger(__name__)


class _Rematch:
    """State handed to a rematch pass.

    ``cause`` is the (entry index, alternative index) of the rule that just
    merged several chunks; reaching it ends the pass. ``reach`` is the
    farthest offset claimed so far and only ever grows.
    """

    __slots__ = ("cause", "reach")

    def __init__(self, cause: tuple[int, int], reach: int) -> None:
        self.cause = cause
        self.reach = reach


class Tokenizer:
    """Applies grammars to text.

    Usage:
        >>> from glint.grammar import Grammar
        >>> grammar = Grammar({"number": r"\\d+", "operator": r"[+*]"})
        >>> Tokenizer().tokenize("1 + 2", grammar)
        (Token(number, '1'), ' ', Token(operator, '+'), ' ', Token(number, '2'))

    The recursion depth, step count and deadline are shared by the
    top-level call and every nested grammar it runs.

    """

    __slots__ = ("_config", "_depth", "_peak", "_steps", "_deadline", "_acc")

    def __init__(self, config: TokenizeConfig | None = None) -> None:
        """Initialize tokenizer.

        Args:
            config: Resource ceilings (defaults to the context's config)
        """
        self._config = config if config is not None else get_tokenize_config()
        self._depth = 0
        self._peak = 0
        self._steps = 0
        self._deadline: float | None = None
        self._acc: TokenizeAccumulator | None = None

    def tokenize(self, text: str, grammar: Grammar) -> tuple[Chunk, ...]:
        """Tokenize text with grammar.

        Args:
            text: Input text
            grammar: Grammar to apply; resolved on first use

        Returns:
            Chunks covering the whole input, in order. Empty input gives ().

        Raises:
            InvalidGrammar: The grammar or a nested grammar is malformed
            PatternEngineFailure: A pattern does not compile
            RecursionLimitExceeded: Nesting went deeper than max_depth, or
                than the interpreter stack allows
            BudgetExceeded: max_steps or timeout ran out
            SequenceOverrun: The grammar keeps producing empty matches
        """
        self._depth = 0
        self._peak = 0
        self._steps = 0
        timeout = self._config.timeout
        self._deadline = perf_counter() + timeout if timeout is not None else None
        self._acc = get_tokenize_accumulator()
        try:
            return self._tokenize(text, grammar)
        except RecursionError as e:
            limit = self._config.max_depth
            logger.warning(
                "Interpreter stack exhausted at recursion depth %d (limit %d)", self._peak, limit
            )
            raise RecursionLimitExceeded(
                self._peak,
                limit,
                f"Interpreter stack exhausted at recursion depth {self._peak} (limit {limit})",
            ) from e

    def _tokenize(self, text: str, grammar: Grammar) -> tuple[Chunk, ...]:
        resolved = resolve_grammar(grammar)

        if self._acc is not None:
            self._acc.record_tokenize(len(text), nested=self._depth > 0)

        if not text:
            return ()

        chunks = ChunkList()
        chunks.insert_after(chunks.head, text)

        self._descend()
        try:
            self._match_grammar(text, chunks, resolved, chunks.head, 0, None)
        finally:
            self._depth -= 1

        return chunks.to_tuple()

    def _match_grammar(
        self,
        text: str,
        chunks: ChunkList,
        grammar: ResolvedGrammar,
        start_node: int,
        start_pos: int,
        rematch: _Rematch | None,
    ) -> None:
        """Apply every rule of grammar, in priority order, from start_node on.

        Args:
            text: The full text being tokenized at this level
            chunks: Working sequence, mutated in place
            grammar: Resolved grammar
            start_node: Handle after which the walk starts
            start_pos: Offset of the first chunk after start_node
            rematch: Rematch state when called after a multi-chunk merge
        """
        text_length = len(text)
        tail = chunks.tail

        for entry_index, (token_type, rules) in enumerate(grammar.entries):
            for alt_index, rule in enumerate(rules):
                if rematch is not None and rematch.cause == (entry_index, alt_index):
                    return

                node = chunks.next(start_node)
                pos = start_pos
                while node != tail:
                    if rematch is not None and pos >= rematch.reach:
                        break

                    if len(chunks) > text_length:
                        logger.warning(
                            "Chunk sequence overrun on %r: %d chunks for %d characters",
                            token_type,
                            len(chunks),
                            text_length,
                        )
                        raise SequenceOverrun(len(chunks), text_length)

                    value = chunks.value(node)
                    if isinstance(value, Token):
                        pos += value.length
                        node = chunks.next(node)
                        continue

                    remove_count = 1

                    if rule.greedy:
                        match = self._search(rule, pos, text)
                        if match is None or match.index >= text_length:
                            # Matches only move right; nothing later in this pass
                            break

                        # Advance to the chunk the match starts in
                        p = pos + len(value)
                        while match.index >= p:
                            node = chunks.next(node)
                            p += chunk_length(chunks.value(node))
                        p -= chunk_length(chunks.value(node))
                        pos = p

                        value = chunks.value(node)
                        if isinstance(value, Token):
                            pos += value.length
                            node = chunks.next(node)
                            continue

                        # Cover the match end, then absorb trailing plain chunks
                        k = node
                        while k != tail and (p < match.end or isinstance(chunks.value(k), str)):
                            remove_count += 1
                            p += chunk_length(chunks.value(k))
                            k = chunks.next(k)
                        remove_count -= 1

                        segment = text[pos:p]
                        offset = match.index - pos
                    else:
                        match = self._search(rule, 0, value)
                        if match is None:
                            pos += len(value)
                            node = chunks.next(node)
                            continue
                        segment = value
                        offset = match.index

                    matched = match.text
                    before = segment[:offset]
                    after = segment[offset + len(matched):]

                    reach = pos + len(segment)
                    if rematch is not None and reach > rematch.reach:
                        rematch.reach = reach

                    remove_from = chunks.prev(node)
                    if before:
                        remove_from = chunks.insert_after(remove_from, before)
                        pos += len(before)

                    chunks.remove_run(remove_from, remove_count)

                    token = self._make_token(token_type, rule, matched)
                    node = chunks.insert_after(remove_from, token)

                    if after:
                        chunks.insert_after(node, after)

                    if remove_count > 1:
                        nested_rematch = _Rematch((entry_index, alt_index), reach)
                        if self._acc is not None:
                            self._acc.rematch_passes += 1
                        self._descend()
                        try:
                            self._match_grammar(text, chunks, grammar, remove_from, pos, nested_rematch)
                        finally:
                            self._depth -= 1

                        if rematch is not None and nested_rematch.reach > rematch.reach:
                            rematch.reach = nested_rematch.reach

                    pos += token.length
                    node = chunks.next(node)

    def _make_token(self, token_type: str, rule: Rule, matched: str) -> Token:
        if rule.inside is not None:
            content: str | tuple[Chunk, ...] = self._tokenize(matched, rule.inside)
        else:
            content = matched
        if self._acc is not None:
            self._acc.token_count += 1
        return Token(type=token_type, content=content, alias=rule.alias, length=len(matched))

    def _search(self, rule: Rule, pos: int, text: str) -> PatternMatch | None:
        """Run one pattern attempt, charging it against the budget."""
        self._steps += 1
        max_steps = self._config.max_steps
        if max_steps is not None and self._steps > max_steps:
            logger.warning("Step budget of %d pattern attempts exhausted", max_steps)
            raise BudgetExceeded(f"step budget of {max_steps} pattern attempts exhausted")
        if self._deadline is not None and perf_counter() > self._deadline:
            logger.warning("Tokenize deadline of %ss exceeded", self._config.timeout)
            raise BudgetExceeded(f"deadline of {self._config.timeout}s exceeded")

        if self._acc is not None:
            self._acc.pattern_attempts += 1
        return match_pattern(rule.pattern, pos, text, rule.lookbehind)  # type: ignore[arg-type]

    def _descend(self) -> None:
        depth = self._depth + 1
        limit = self._config.max_depth
        if depth > limit:
            logger.warning("Recursion depth %d exceeds limit %d", depth, limit)
            raise RecursionLimitExceeded(depth, limit)
        self._depth = depth
        if depth > self._peak:
            self._peak = depth


def tokenize(
    text: str,
    grammar: Grammar,
    *,
    config: TokenizeConfig | None = None,
) -> tuple[Chunk, ...]:
    """Tokenize text with grammar.

    Args:
        text: Input text
        grammar: Grammar to apply
        config: Resource ceilings (defaults to the context's config)

    Returns:
        Tuple of chunks (plain strings and Tokens) covering the input

    Example:
        >>> from glint.languages import get_language
        >>> tokenize("a{color:red}", get_language("css"))[:2]
        (Token(selector, 'a'), Token(punctuation, '{'))
    """
    return Tokenizer(config).tokenize(text, grammar)


__all__ = [
    "Tokenizer",
    "tokenize",
]

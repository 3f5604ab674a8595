"""
Glint: grammar-driven tokenizer for syntax highlighting

Turns text plus a prioritized, declarative set of pattern rules into an
ordered, gap-free sequence of typed tokens. Rules can nest grammars, match
greedily across already split text, emulate lookbehind, and fall back to
an enclosing (even self-referential) rule-set. Zero runtime dependencies.

Quick Start:
    >>> from glint import tokenize
    >>> from glint.languages import get_language
    >>> tokens = tokenize("a { color: red }", get_language("css"))
    >>> tokens[0]
    Token(selector, 'a')

Custom Grammars:
    >>> from glint import Grammar, Rule
    >>> ini = Grammar({
    ...     "comment": r";.*",
    ...     "section": Rule(r"(^|\\n)\\[[^\\]\\n]+\\]", lookbehind=True),
    ...     "key": Rule(r"(^|\\n)[^=\\n]+(?==)", lookbehind=True, alias="property"),
    ... })
    >>> [t.category for t in tokenize("[a]\\nx=1", ini) if not isinstance(t, str)]
    ['section', 'property']

Highlight Ranges:
    >>> from glint import highlight_ranges
    >>> [r.category for r in highlight_ranges(tokens)][:2]
    ['selector', 'punctuation']
"""

from glint.chunks import ChunkList
from glint.config import (
    TokenizeConfig,
    get_tokenize_config,
    reset_tokenize_config,
    set_tokenize_config,
    tokenize_config_context,
)
from glint.errors import (
    BudgetExceeded,
    GlintError,
    InvalidGrammar,
    PatternEngineFailure,
    RecursionLimitExceeded,
    ResourceExhausted,
    SequenceOverrun,
)
from glint.grammar import Grammar, ResolvedGrammar, Rule, resolve_grammar
from glint.matching import PatternMatch, match_pattern
from glint.profiling import TokenizeAccumulator, get_tokenize_accumulator, profiled_tokenize
from glint.ranges import HighlightRange, highlight_ranges
from glint.tokenizer import Tokenizer, tokenize
from glint.tokens import Chunk, Token, chunk_length, iter_tokens, text_of

__version__ = "0.1.0"


__all__ = [  # noqa: RUF022 - grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "tokenize",
    "Tokenizer",
    # Grammars
    "Grammar",
    "Rule",
    "ResolvedGrammar",
    "resolve_grammar",
    # Tokens
    "Chunk",
    "Token",
    "chunk_length",
    "iter_tokens",
    "text_of",
    # Building blocks
    "ChunkList",
    "PatternMatch",
    "match_pattern",
    # Highlight ranges
    "HighlightRange",
    "highlight_ranges",
    # Errors
    "GlintError",
    "InvalidGrammar",
    "PatternEngineFailure",
    "ResourceExhausted",
    "RecursionLimitExceeded",
    "BudgetExceeded",
    "SequenceOverrun",
    # Profiling
    "TokenizeAccumulator",
    "get_tokenize_accumulator",
    "profiled_tokenize",
    # Configuration (ContextVar-based)
    "TokenizeConfig",
    "get_tokenize_config",
    "set_tokenize_config",
    "reset_tokenize_config",
    "tokenize_config_context",
]

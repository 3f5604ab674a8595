"""Built-in grammars and the language registry.

Languages are looked up by name or alias:

    >>> from glint.languages import get_language
    >>> get_language("css").name
    'css'

Additional grammars can be registered at import time of the host
application:

    >>> from glint.grammar import Grammar
    >>> _ = register_language("ini", Grammar({"comment": r"^;.*"}), "conf")

Thread Safety:
Register languages during startup. Lookups are plain dict reads.

"""

from __future__ import annotations

from glint.grammar import Grammar
from glint.languages.css import css

# Registry of language names and aliases to grammars
LANGUAGES: dict[str, Grammar] = {}


def register_language(name: str, grammar: Grammar, *aliases: str) -> Grammar:
    """Register a grammar under a name and optional aliases.

    Args:
        name: Language identifier
        grammar: Grammar to register
        *aliases: Extra names for the same grammar

    Returns:
        The grammar, for chaining

    Raises:
        TypeError: If grammar is not a Grammar
    """
    if not isinstance(grammar, Grammar):
        raise TypeError(f"Expected a Grammar for {name!r}, got {type(grammar).__name__}")
    for key in (name, *aliases):
        LANGUAGES[key.lower()] = grammar
    return grammar


def get_language(name: str) -> Grammar:
    """Get a grammar by language name or alias (case-insensitive).

    Raises:
        KeyError: If the language is not registered

    """
    key = name.lower()
    if key not in LANGUAGES:
        available = ", ".join(sorted(LANGUAGES))
        raise KeyError(f"Unknown language: {name!r}. Available: {available}")
    return LANGUAGES[key]


def supports_language(name: str) -> bool:
    """Check if a grammar is registered for the name or alias."""
    return name.lower() in LANGUAGES


register_language("css", css)

__all__ = [
    "LANGUAGES",
    "css",
    "get_language",
    "register_language",
    "supports_language",
]

"""CSS grammar.

At-rules tokenize their prelude with a small grammar that falls back to
the full CSS grammar, so ``@media (min-width: 10px)`` gets properties and
punctuation as well as the rule name and media keywords.

Patterns compile with ``re.ASCII``: word characters, word boundaries and
case folding are ASCII-only, and non-ASCII letters are listed explicitly
as ``\\xA0-\\uFFFF``. Whitespace is spelled out as ``_SPACE``, which also
covers the non-ASCII separators and U+FEFF.
"""

from __future__ import annotations

import re

from glint.grammar import Grammar, Rule

# Character class body and class for whitespace
_SPACE_CHARS = r"\t\n\v\f\r \xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
_SPACE = "[" + _SPACE_CHARS + "]"

STRING = r"""(?:"(?:\\(?:\r\n|[\s\S])|[^"\\\r\n])*"|'(?:\\(?:\r\n|[\s\S])|[^'\\\r\n])*')"""


def _compile(pattern: str, flags: int = 0) -> re.Pattern[str]:
    return re.compile(pattern, re.ASCII | flags)


_atrule_inside = Grammar(
    {
        "rule": _compile(r"^@[\w-]+"),
        "selector-function-argument": Rule(
            pattern=_compile(
                r"(\bselector" + _SPACE + r"*\(" + _SPACE + r"*(?![" + _SPACE_CHARS + r")]))"
                r"(?:[^()" + _SPACE_CHARS + r"]|" + _SPACE + r"+(?![" + _SPACE_CHARS + r")])"
                r"|\((?:[^()]|\([^()]*\))*\))+(?=" + _SPACE + r"*\))"
            ),
            lookbehind=True,
            alias="selector",
        ),
        "keyword": Rule(
            pattern=_compile(r"(^|[^\w-])(?:and|not|only|or)(?![\w-])"),
            lookbehind=True,
        ),
    },
    name="css-atrule",
)

_url_inside = Grammar(
    {
        "function": _compile(r"^url", re.IGNORECASE),
        "punctuation": _compile(r"^\(|\)\Z"),
        "string": Rule(pattern=_compile("^" + STRING + r"\Z"), alias="url"),
    },
    name="css-url",
)

css = Grammar(
    {
        "comment": _compile(r"/\*[\s\S]*?\*/"),
        "atrule": Rule(
            pattern=_compile(
                r"@[\w-](?:[^;{" + _SPACE_CHARS + r"\"']|" + _SPACE + r"+(?!" + _SPACE + r")|"
                + STRING
                + r")*?(?:;|(?=" + _SPACE + r"*\{))"
            ),
            inside=_atrule_inside,
        ),
        "url": Rule(
            pattern=_compile(
                r"\burl\((?:" + STRING + r"|(?:[^\\\r\n()\"']|\\[\s\S])*)\)",
                re.IGNORECASE,
            ),
            greedy=True,
            inside=_url_inside,
        ),
        "selector": Rule(
            pattern=_compile(
                r"(^|[{}" + _SPACE_CHARS + r"])[^{}" + _SPACE_CHARS + r"]"
                r"(?:[^{};\"'" + _SPACE_CHARS + r"]|" + _SPACE + r"+(?![" + _SPACE_CHARS + r"{])|"
                + STRING
                + r")*(?=" + _SPACE + r"*\{)"
            ),
            lookbehind=True,
        ),
        "string": Rule(pattern=_compile(STRING), greedy=True),
        "property": Rule(
            pattern=_compile(
                r"(^|[^-\w\xA0-\uFFFF])(?!" + _SPACE + r")[-_a-z\xA0-\uFFFF]"
                r"(?:(?!" + _SPACE + r")[-\w\xA0-\uFFFF])*(?=" + _SPACE + r"*:)",
                re.IGNORECASE,
            ),
            lookbehind=True,
        ),
        "important": _compile(r"!important\b", re.IGNORECASE),
        "function": Rule(
            pattern=_compile(r"(^|[^-a-z0-9])[-a-z0-9]+(?=\()", re.IGNORECASE),
            lookbehind=True,
        ),
        "punctuation": _compile(r"[(){};:,]"),
    },
    name="css",
)

_atrule_inside.rest = css

__all__ = ["css"]

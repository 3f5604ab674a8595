"""Define a small INI grammar with lookbehind, aliases and a nested value grammar."""

from glint import Grammar, Rule, iter_tokens, tokenize

value = Grammar(
    {
        "number": r"\b\d+(?:\.\d+)?\b",
        "boolean": r"\b(?:true|false)\b",
    }
)

ini = Grammar(
    {
        "comment": r"[;#][^\n]*",
        "section": Rule(pattern=r"(^|\n)\[[^\]\n]+\]", lookbehind=True),
        "key": Rule(pattern=r"(^|\n)[^=\n]+?(?=\s*=)", lookbehind=True, alias="property"),
        "value": Rule(pattern=r"(=)[^\n]*", lookbehind=True, inside=value),
        "punctuation": r"=",
    },
    name="ini",
)

source = "[server]\nport = 8080\ndebug = false ; dev only\n"

for token in iter_tokens(tokenize(source, ini)):
    print(f"{token.category:12} {token.content if isinstance(token.content, str) else '...'}")

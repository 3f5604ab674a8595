"""Tokenize a stylesheet in 3 lines with the built-in CSS grammar."""

from glint import tokenize
from glint.languages import get_language

for chunk in tokenize("a { color: red }", get_language("css")):
    print(repr(chunk))

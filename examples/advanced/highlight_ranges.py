"""Turn tokens into (start, end, category) spans for an editor."""

from glint import highlight_ranges, tokenize
from glint.languages import get_language

source = '@import url("base.css");\nh1 { color: red !important }'

for span in highlight_ranges(tokenize(source, get_language("css"))):
    print(f"{span.start:3}-{span.end:<3} {span.category:12} {source[span.start:span.end]!r}")

"""Free-threading safe: tokenize 1000 stylesheets in parallel with one shared grammar."""

from concurrent.futures import ThreadPoolExecutor
from functools import partial

from glint import tokenize
from glint.languages import get_language

css = get_language("css")
sheets = [f".c{i} {{ width: {i}px; background: url(\"img/{i}.png\") }}" for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(partial(tokenize, grammar=css), sheets))

print(f"Tokenized {len(results)} stylesheets in parallel")
print("First sheet chunks:", len(results[0]))

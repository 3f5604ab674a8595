"""Benchmark the CSS grammar on a generated stylesheet.

Run with:
    python benchmarks/benchmark_tokenize.py
"""

import time

from glint import tokenize
from glint.languages import get_language
from glint.profiling import profiled_tokenize


def generate_stylesheet(rules: int = 500) -> str:
    """Generate a stylesheet with at-rules, strings, urls and comments."""
    parts = []
    for i in range(rules):
        parts.append(
            f"/* block {i} */\n"
            f"@media (min-width: {i}px) {{\n"
            f"  .item-{i} > a:hover {{ color: #{i:03x}; content: \"{i};\" }}\n"
            f"  .bg-{i} {{ background: url(\"img/{i}.png\") no-repeat !important; }}\n"
            f"}}\n"
        )
    return "".join(parts)


def benchmark_glint(source: str, iterations: int = 10) -> float:
    """Average seconds per tokenize() call."""
    css = get_language("css")

    # Warmup (also resolves the grammar)
    tokenize(source, css)

    start = time.perf_counter()
    for _ in range(iterations):
        tokenize(source, css)
    elapsed = time.perf_counter() - start

    return elapsed / iterations


def main() -> None:
    source = generate_stylesheet()
    print(f"Stylesheet: {len(source):,} chars")

    avg = benchmark_glint(source)
    print(f"glint:  {avg * 1000:.2f}ms per call ({len(source) / avg / 1e6:.2f} MB/s)")

    with profiled_tokenize() as metrics:
        tokenize(source, get_language("css"))
    for key, value in metrics.summary().items():
        print(f"  {key:18} {value}")


if __name__ == "__main__":
    main()

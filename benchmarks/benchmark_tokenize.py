"""Benchmark the lexer and the highlighter on FHIR mappings.

Run with:
    pytest benchmarks/benchmark_tokenize.py -v --benchmark-only
"""

import pytest

from tinct import FML, highlight, tokenize
from tinct.tokens import text_of


class TestTokenizeBenchmarks:
    @pytest.mark.benchmark(group="tokenize")
    def test_large_mapping(self, benchmark, large_mapping: str) -> None:
        tokens = benchmark(tokenize, large_mapping, FML)
        assert text_of(tokens) == large_mapping

    @pytest.mark.benchmark(group="tokenize")
    def test_small_snippets(self, benchmark, small_snippets: list[str]) -> None:
        def run() -> None:
            for code in small_snippets:
                tokenize(code, FML)

        benchmark(run)


class TestHighlightBenchmarks:
    @pytest.mark.benchmark(group="highlight")
    def test_large_mapping(self, benchmark, large_mapping: str) -> None:
        html = benchmark(highlight, large_mapping, "fml")
        assert html.startswith("<pre")

    @pytest.mark.benchmark(group="highlight")
    def test_large_mapping_with_linenos(self, benchmark, large_mapping: str) -> None:
        html = benchmark(lambda: highlight(large_mapping, "fml", show_linenos=True))
        assert 'class="lineno"' in html

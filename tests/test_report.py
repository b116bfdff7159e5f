"""Tests for the text report renderer."""

from serde_bench.analysis import analyze
from serde_bench.benchmarks import BenchmarkResult, RunOutcome
from serde_bench.report import render, render_table


def sample_outcome() -> RunOutcome:
    return RunOutcome(
        registered=["json", "xml", "schema-msgpack", "broken"],
        results={
            "json": BenchmarkResult("json", 1000, 0.0020, 0.0030, 120),
            "xml": BenchmarkResult("xml", 1000, 0.0040, 0.0060, 260),
            "schema-msgpack": BenchmarkResult("schema-msgpack", 1000, 0.0010, 0.0015, 48),
        },
        exclusions={"broken": "broken: round trip returned 0 records, expected 3"},
    )


class TestRender:
    """Formatting the comparison."""

    def test_table_rows(self):
        lines = render_table(analyze(sample_outcome()))
        assert "Format" in lines[0] and "Total (ms)" in lines[0]
        json_row = next(line for line in lines if line.startswith("| json "))
        assert "120" in json_row
        assert "2.0000" in json_row
        assert "3.0000" in json_row
        assert "5.0000" in json_row

    def test_ranking_summary(self):
        text = render(analyze(sample_outcome()))
        assert "Fastest encode : schema-msgpack (1.0000 ms)" in text
        assert "Fastest decode : schema-msgpack (1.5000 ms)" in text
        assert "Smallest size  : schema-msgpack (48 bytes)" in text
        assert "size   : schema-msgpack < json < xml" in text

    def test_gains(self):
        text = render(analyze(sample_outcome()))
        assert "GAINS vs json" in text
        assert "60.0% smaller" in text
        assert "100.0% slower" in text

    def test_projection_is_labelled(self):
        text = render(analyze(sample_outcome(), requests_per_second=10_000))
        assert "PROJECTED BANDWIDTH at 10,000 requests/second (not measured)" in text

    def test_exclusions_listed(self):
        text = render(analyze(sample_outcome()))
        assert "EXCLUDED" in text
        assert "broken: broken: round trip returned 0 records" in text

    def test_not_applicable_gain(self):
        outcome = RunOutcome(
            registered=["json", "xml"],
            results={
                "json": BenchmarkResult("json", 1, 0.0, 0.001, 10),
                "xml": BenchmarkResult("xml", 1, 0.001, 0.001, 20),
            },
            exclusions={},
        )
        assert "encode : n/a" in render(analyze(outcome))

    def test_missing_baseline(self):
        outcome = RunOutcome(
            registered=["xml"],
            results={"xml": BenchmarkResult("xml", 1, 0.001, 0.001, 20)},
            exclusions={},
        )
        assert "gains not available" in render(analyze(outcome))

    def test_empty_report(self):
        text = render(analyze({}))
        lines = text.splitlines()
        assert any("Format" in line for line in lines)
        assert "RANKING" not in text
        assert "EXCLUDED" not in text

    def test_render_does_not_change_report(self):
        report = analyze(sample_outcome())
        before = {name: r.as_dict() for name, r in report.results.items()}
        render(report)
        assert {name: r.as_dict() for name, r in report.results.items()} == before

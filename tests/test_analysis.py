"""Tests for ranking, baseline gains and bandwidth projections."""

import pytest

from serde_bench.analysis import Projection, analyze, human_rate, rank, relative_gain
from serde_bench.benchmarks import BenchmarkResult, RunOutcome
from serde_bench.errors import BaselineUndefinedError


def result(codec: str, encode_ms: float = 1.0, decode_ms: float = 1.0, size: int = 100) -> BenchmarkResult:
    return BenchmarkResult(codec, 1000, encode_ms / 1000, decode_ms / 1000, size)


class TestRank:
    """Ascending ranking with registration-order ties."""

    def test_tie_keeps_registration_order(self):
        results = {
            "slow": result("slow", encode_ms=5.0),
            "first": result("first", encode_ms=2.0),
            "second": result("second", encode_ms=2.0),
        }
        assert rank(results, "encode") == ["first", "second", "slow"]

    def test_tie_order_follows_insertion_not_name(self):
        results = {
            "zeta": result("zeta", size=10),
            "alpha": result("alpha", size=10),
        }
        assert rank(results, "size") == ["zeta", "alpha"]

    def test_axes_are_independent(self):
        results = {
            "a": result("a", encode_ms=1.0, decode_ms=3.0, size=50),
            "b": result("b", encode_ms=2.0, decode_ms=1.0, size=40),
        }
        report = analyze(results, baseline="a")
        assert report.rankings["encode"] == ["a", "b"]
        assert report.rankings["decode"] == ["b", "a"]
        assert report.rankings["size"] == ["b", "a"]


class TestRelativeGain:
    """Percentage deltas against the baseline."""

    def test_exact_size_gain(self):
        assert relative_gain(100, 40) == 60.0

    def test_negative_when_worse(self):
        assert relative_gain(100, 150) == -50.0

    def test_zero_baseline(self):
        with pytest.raises(BaselineUndefinedError):
            relative_gain(0, 10)


class TestAnalyze:
    """Building comparison reports."""

    def test_gains_against_baseline(self):
        results = {
            "json": result("json", size=100),
            "schema-msgpack": result("schema-msgpack", size=40),
        }
        report = analyze(results)
        assert report.baseline == "json"
        assert "json" not in report.gains
        assert report.gains["schema-msgpack"]["size"] == 60.0

    def test_zero_baseline_is_not_applicable(self):
        results = {
            "json": result("json", encode_ms=0.0, size=100),
            "xml": result("xml", encode_ms=1.0, size=200),
        }
        report = analyze(results)
        assert report.gains["xml"]["encode"] is None
        assert report.gains["xml"]["size"] == -100.0

    def test_missing_baseline(self):
        report = analyze({"xml": result("xml")}, baseline="json")
        assert not report.has_baseline
        assert report.gains == {}
        assert report.savings == {}

    def test_report_references_results(self):
        results = {"json": result("json")}
        report = analyze(results)
        assert report.results["json"] is results["json"]

    def test_outcome_exclusions_carried(self):
        outcome = RunOutcome(
            registered=["json", "broken"],
            results={"json": result("json")},
            exclusions={"broken": "broken: bad bytes"},
        )
        report = analyze(outcome)
        assert report.codecs == ["json"]
        assert report.exclusions == {"broken": "broken: bad bytes"}
        assert set(report.codecs) | set(report.exclusions) == set(outcome.registered)

    def test_bandwidth_projection(self):
        report = analyze({"json": result("json", size=1024), "xml": result("xml", size=2048)},
                         requests_per_second=1024)
        assert report.bandwidth["json"].bytes_per_second == 1024 * 1024
        assert (report.bandwidth["json"].value, report.bandwidth["json"].unit) == (1.0, "MB/s")
        assert report.savings["xml"].bytes_per_second == -1024 * 1024

    def test_negative_rate_rejected(self):
        with pytest.raises(ValueError):
            analyze({}, requests_per_second=-1)

    def test_empty(self):
        report = analyze({})
        assert report.codecs == []
        assert report.best("encode") is None


class TestHumanRate:
    """Scaling byte rates."""

    @pytest.mark.parametrize(
        "rate,expected",
        [
            (0, (0.0, "B/s")),
            (512, (512.0, "B/s")),
            (2048, (2.0, "KB/s")),
            (3 * 1024 ** 2, (3.0, "MB/s")),
            (5 * 1024 ** 3, (5.0, "GB/s")),
            (2048 * 1024 ** 3, (2048.0, "GB/s")),
        ],
    )
    def test_units(self, rate, expected):
        assert human_rate(rate) == expected

    def test_projection_repr_labels_projection(self):
        assert "projected" in repr(Projection(2048))

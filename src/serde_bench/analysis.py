"""Rank benchmark results and compare them against a baseline codec."""

import logging

from serde_bench.benchmarks import BenchmarkResult, RunOutcome
from serde_bench.errors import BaselineUndefinedError

logger = logging.getLogger(__name__)

DEFAULT_BASELINE = "json"
DEFAULT_REQUESTS_PER_SECOND = 10_000

# Ranking axes and the result attribute each one sorts on.
METRICS = {
    "encode": "encode_avg",
    "decode": "decode_avg",
    "size": "encoded_size",
}

_UNITS = ["B/s", "KB/s", "MB/s", "GB/s"]


class Projection:
    """A derived bandwidth figure. Projected, never measured."""

    def __init__(self, bytes_per_second: float):
        self.bytes_per_second = bytes_per_second
        self.value, self.unit = human_rate(bytes_per_second)

    def __repr__(self) -> str:
        return f"{self.value:.2f} {self.unit} (projected)"


class ComparisonReport:
    """Read-only comparison of benchmark results.

    ``results`` holds the same BenchmarkResult objects the runner produced,
    in registration order.
    """

    def __init__(
        self,
        results: dict[str, BenchmarkResult],
        rankings: dict[str, list[str]],
        baseline: str,
        gains: dict[str, dict[str, float | None]],
        requests_per_second: int,
        bandwidth: dict[str, Projection],
        savings: dict[str, Projection],
        exclusions: dict[str, str],
    ):
        self.results = results
        self.rankings = rankings
        self.baseline = baseline
        self.gains = gains
        self.requests_per_second = requests_per_second
        self.bandwidth = bandwidth
        self.savings = savings
        self.exclusions = exclusions

    @property
    def codecs(self) -> list[str]:
        return list(self.results)

    @property
    def has_baseline(self) -> bool:
        return self.baseline in self.results

    def best(self, metric: str) -> BenchmarkResult | None:
        """The top-ranked result on one axis, or None for an empty report."""
        ranking = self.rankings[metric]
        return self.results[ranking[0]] if ranking else None


def human_rate(bytes_per_second: float) -> tuple[float, str]:
    """Scale a byte rate to the largest 1024-based unit below 1024."""
    value = float(bytes_per_second)
    for unit in _UNITS[:-1]:
        if abs(value) < 1024:
            return value, unit
        value /= 1024
    return value, _UNITS[-1]


def relative_gain(baseline: float, candidate: float) -> float:
    """
    Percentage by which candidate is smaller or faster than baseline.

    Positive means the candidate beats the baseline.

    Raises:
        BaselineUndefinedError: If the baseline value is zero.
    """
    if baseline == 0:
        raise BaselineUndefinedError("baseline value is zero")
    return (baseline - candidate) * 100 / baseline


def rank(results: dict[str, BenchmarkResult], metric: str) -> list[str]:
    """Codec names ordered ascending on one metric; ties keep insertion order."""
    attr = METRICS[metric]
    return sorted(results, key=lambda name: getattr(results[name], attr))


def analyze(
    results: RunOutcome | dict[str, BenchmarkResult],
    baseline: str = DEFAULT_BASELINE,
    requests_per_second: int = DEFAULT_REQUESTS_PER_SECOND,
    exclusions: dict[str, str] | None = None,
) -> ComparisonReport:
    """
    Build a ComparisonReport from benchmark results.

    Args:
        results: A RunOutcome, or a mapping of codec name to result in
            registration order
        baseline: Codec name relative gains are computed against
        requests_per_second: Assumed request rate for bandwidth projections
        exclusions: Codec name to exclusion reason. Taken from the
            RunOutcome when one is given.

    Returns:
        ComparisonReport
    """
    if requests_per_second < 0:
        raise ValueError(f"requests_per_second must be >= 0, got {requests_per_second}")

    if isinstance(results, RunOutcome):
        if exclusions is None:
            exclusions = results.exclusions
        results = results.results
    exclusions = dict(exclusions or {})

    rankings = {metric: rank(results, metric) for metric in METRICS}

    gains: dict[str, dict[str, float | None]] = {}
    savings: dict[str, Projection] = {}
    base = results.get(baseline)
    if base is None:
        logger.warning("Baseline %s has no result; relative gains are not computed", baseline)
    else:
        for name, result in results.items():
            if name == baseline:
                continue
            gains[name] = {}
            for metric, attr in METRICS.items():
                try:
                    gains[name][metric] = relative_gain(getattr(base, attr), getattr(result, attr))
                except BaselineUndefinedError:
                    logger.info("Gain of %s on %s against %s is not applicable", name, metric, baseline)
                    gains[name][metric] = None
            savings[name] = Projection((base.encoded_size - result.encoded_size) * requests_per_second)

    bandwidth = {
        name: Projection(result.encoded_size * requests_per_second)
        for name, result in results.items()
    }

    return ComparisonReport(
        results=results,
        rankings=rankings,
        baseline=baseline,
        gains=gains,
        requests_per_second=requests_per_second,
        bandwidth=bandwidth,
        savings=savings,
        exclusions=exclusions,
    )

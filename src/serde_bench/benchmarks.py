"""Benchmark runner: timed encode/decode loops over each codec."""

import logging
import time
from typing import Callable

from tqdm import tqdm

from serde_bench.codecs import Codec
from serde_bench.errors import BenchmarkError, VerificationError
from serde_bench.records import Dataset
from serde_bench.verify import check

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 1000

Clock = Callable[[], float]


class BenchmarkResult:
    """Averaged timings and encoded size for one codec."""

    def __init__(
        self,
        codec: str,
        iterations: int,
        encode_avg: float,
        decode_avg: float,
        encoded_size: int,
    ):
        self.codec = codec
        self.iterations = iterations
        self.encode_avg = encode_avg
        self.decode_avg = decode_avg
        self.encoded_size = encoded_size
        self.total_avg = encode_avg + decode_avg

    def as_dict(self) -> dict:
        return {
            "codec": self.codec,
            "iterations": self.iterations,
            "encode_avg": self.encode_avg,
            "decode_avg": self.decode_avg,
            "total_avg": self.total_avg,
            "encoded_size": self.encoded_size,
        }

    def __repr__(self) -> str:
        return (
            f"{self.codec:16s}: "
            f"encode {self.encode_avg * 1000:8.4f}ms, "
            f"decode {self.decode_avg * 1000:8.4f}ms, "
            f"{self.encoded_size:8d} bytes "
            f"({self.iterations} iterations)"
        )


class RunOutcome:
    """Results of every codec that survived plus the reasons others did not."""

    def __init__(
        self,
        registered: list[str],
        results: dict[str, BenchmarkResult],
        exclusions: dict[str, str],
    ):
        self.registered = registered
        self.results = results
        self.exclusions = exclusions


def measure_size(codec: Codec, dataset: Dataset) -> tuple[bytes, int]:
    """
    Encode the dataset once, outside any timed region.

    The encoded size is the same for every iteration with a fixed dataset,
    so it is measured a single time here instead of inside the loop.

    Returns:
        Tuple of (encoded bytes, size in bytes)
    """
    encoded = codec.encode(dataset)
    return encoded, len(encoded)


def run(
    codec: Codec,
    dataset: Dataset,
    iterations: int = DEFAULT_ITERATIONS,
    clock: Clock = time.perf_counter,
) -> BenchmarkResult:
    """
    Benchmark one codec.

    Verification, size measurement and the round-trip check all
    happen before the timed loop. Inside the loop each encode and each
    decode is timed on its own and the durations are summed separately.

    Args:
        codec: Codec to benchmark
        dataset: Dataset to encode on every iteration
        iterations: Number of encode/decode repetitions
        clock: Monotonic clock returning seconds

    Returns:
        BenchmarkResult with per-call averages in seconds

    Raises:
        ValueError: If iterations is less than 1
        BenchmarkError: If verification, encoding or decoding fails, or the
            codec raises anything else
    """
    if iterations < 1:
        raise ValueError(f"iterations must be >= 1, got {iterations}")

    try:
        verdict = codec.verify(dataset)
        if not verdict:
            diagnostic = getattr(verdict, "diagnostic", "") or "verify returned False"
            raise VerificationError(codec.name, f"dataset rejected: {diagnostic}")

        encoded, encoded_size = measure_size(codec, dataset)
        check(dataset, codec.decode(encoded), codec=codec.name)

        encode_total = 0.0
        decode_total = 0.0
        for _ in range(iterations):
            start = clock()
            encoded = codec.encode(dataset)
            encode_total += clock() - start

            start = clock()
            codec.decode(encoded)
            decode_total += clock() - start
    except Exception as exc:
        raise BenchmarkError(codec.name, exc) from exc

    return BenchmarkResult(
        codec=codec.name,
        iterations=iterations,
        encode_avg=encode_total / iterations,
        decode_avg=decode_total / iterations,
        encoded_size=encoded_size,
    )


def run_benchmarks(
    codecs: list[Codec],
    dataset: Dataset,
    iterations: int = DEFAULT_ITERATIONS,
    clock: Clock = time.perf_counter,
    progress: bool = False,
) -> RunOutcome:
    """
    Benchmark every codec, one after another.

    A failing codec is recorded in the exclusions and does not stop the
    others.

    Args:
        codecs: Codecs in registration order
        dataset: Dataset shared read-only by all codecs
        iterations: Number of repetitions per codec
        clock: Monotonic clock returning seconds
        progress: Show a tqdm progress bar across codecs

    Returns:
        RunOutcome with results and exclusions keyed by codec name
    """
    registered = [codec.name for codec in codecs]
    if len(set(registered)) != len(registered):
        raise ValueError(f"codec names must be unique, got {registered}")
    if iterations < 1:
        raise ValueError(f"iterations must be >= 1, got {iterations}")

    results: dict[str, BenchmarkResult] = {}
    exclusions: dict[str, str] = {}

    for codec in tqdm(codecs, desc="Benchmarking", unit="codec", disable=not progress):
        logger.info("Benchmarking %s (%d iterations, %d records)...", codec.name, iterations, len(dataset))
        try:
            result = run(codec, dataset, iterations=iterations, clock=clock)
        except BenchmarkError as exc:
            exclusions[codec.name] = str(exc.cause)
            logger.warning("Excluding %s: %s", codec.name, exc.cause)
            continue
        results[codec.name] = result
        logger.info("  %r", result)

    return RunOutcome(registered=registered, results=results, exclusions=exclusions)

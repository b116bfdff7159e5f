"""Serialization format benchmarking suite."""

from serde_bench.analysis import ComparisonReport, analyze
from serde_bench.benchmarks import BenchmarkResult, RunOutcome, run, run_benchmarks
from serde_bench.codecs import Codec, Verdict, build_codecs
from serde_bench.records import Record, build, generate
from serde_bench.report import render
from serde_bench.schema import Schema, load_schema

__all__ = [
    "BenchmarkResult",
    "Codec",
    "ComparisonReport",
    "Record",
    "RunOutcome",
    "Schema",
    "Verdict",
    "analyze",
    "build",
    "build_codecs",
    "generate",
    "load_schema",
    "render",
    "run",
    "run_benchmarks",
]

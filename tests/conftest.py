"""Shared fixtures for serde-bench tests."""

import matplotlib
import pytest

from serde_bench import records
from serde_bench.codecs import JsonCodec, Verdict
from serde_bench.schema import load_schema

matplotlib.use("Agg")


class FakeClock:
    """Deterministic clock: time only moves when advanced or ticked."""

    def __init__(self, tick: float = 0.0):
        self.now = 0.0
        self.tick = tick

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        self.now += self.tick
        return self.now


class FixedCostCodec(JsonCodec):
    """JSON codec whose encode and decode take a fixed simulated duration."""

    def __init__(self, clock: FakeClock, encode_cost: float, decode_cost: float, name: str = "fixed"):
        self.name = name
        self.clock = clock
        self.encode_cost = encode_cost
        self.decode_cost = decode_cost

    def encode(self, dataset):
        self.clock.advance(self.encode_cost)
        return super().encode(dataset)

    def decode(self, data):
        self.clock.advance(self.decode_cost)
        return super().decode(data)


class RejectingCodec(JsonCodec):
    """Schema-aware codec whose verify always fails."""

    name = "rejecting"
    has_schema = True

    def verify(self, dataset):
        return Verdict(False, "forced failure")


class DroppingCodec(JsonCodec):
    """Codec that loses the last record on decode."""

    name = "dropping"

    def decode(self, data):
        return super().decode(data)[:-1]


@pytest.fixture
def dataset():
    return records.build()


@pytest.fixture
def scenario_dataset():
    return (
        records.Record(id=1, name="A", salary=100.0),
        records.Record(id=2, name="B", salary=200.0),
        records.Record(id=3, name="C", salary=300.0),
    )


@pytest.fixture(scope="session")
def schema():
    return load_schema()

"""Round-trip correctness check applied once per codec."""

from serde_bench.errors import VerificationError
from serde_bench.records import Dataset


def check(original: Dataset, decoded: Dataset, codec: str = "") -> None:
    """
    Check that a decoded dataset reproduces the original record count.

    A codec that silently drops records would otherwise look fast, so the
    counts must match exactly.

    Raises:
        VerificationError: If the record counts differ.
    """
    expected = len(original)
    actual = len(decoded)
    if actual != expected:
        raise VerificationError(
            codec,
            f"round trip returned {actual} records, expected {expected}",
            expected=expected,
            actual=actual,
        )

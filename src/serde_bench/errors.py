"""Exceptions raised by the benchmarking harness."""


class BenchError(Exception):
    """Base class for all serde-bench errors."""


class SchemaLoadError(BenchError):
    """The schema resource is missing or malformed. Fatal for the whole run."""


class CodecError(BenchError):
    """A failure attributed to a single codec."""

    def __init__(self, codec: str, message: str):
        super().__init__(f"{codec}: {message}")
        self.codec = codec
        self.message = message


class EncodeError(CodecError):
    """The codec could not encode the dataset."""


class DecodeError(CodecError):
    """The codec could not decode its input (malformed or truncated bytes)."""


class VerificationError(CodecError):
    """A round trip or schema check did not reproduce the original dataset."""

    def __init__(
        self,
        codec: str,
        message: str,
        expected: int | None = None,
        actual: int | None = None,
    ):
        super().__init__(codec, message)
        self.expected = expected
        self.actual = actual


class BenchmarkError(BenchError):
    """Wraps the failure that aborted one codec's benchmark."""

    def __init__(self, codec: str, cause: Exception):
        super().__init__(f"benchmark of {codec!r} failed: {cause}")
        self.codec = codec
        self.cause = cause


class BaselineUndefinedError(BenchError):
    """A relative gain was requested against a zero-valued baseline."""

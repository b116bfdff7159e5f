"""Load the record schema used by schema-validated codecs.

The schema resource is a small JSON document naming the top-level message,
the field that holds the repeated records, and each record field with its
type.  It is loaded once at startup and turned into ``msgspec`` Struct types
that are shared read-only by every encode/decode call.
"""

import logging
from importlib import resources
from pathlib import Path
from typing import Any, Literal

import msgspec

from serde_bench.errors import SchemaLoadError

logger = logging.getLogger(__name__)

FIELD_TYPES: dict[str, type] = {
    "int": int,
    "float": float,
    "str": str,
    "bool": bool,
}


class FieldSpec(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    name: str
    type: Literal["int", "float", "str", "bool"]


class RecordSpec(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    name: str
    fields: list[FieldSpec]


class SchemaSpec(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    message: str
    repeated: str
    record: RecordSpec


class Schema:
    """A loaded schema and the Struct types built from it."""

    def __init__(self, spec: SchemaSpec, source: str):
        self.spec = spec
        self.source = source
        self.field_names = tuple(field.name for field in spec.record.fields)
        self.record_type = msgspec.defstruct(
            spec.record.name,
            [(field.name, FIELD_TYPES[field.type]) for field in spec.record.fields],
            frozen=True,
            forbid_unknown_fields=True,
            array_like=True,
        )
        self.message_type = msgspec.defstruct(
            spec.message,
            [(spec.repeated, list[self.record_type])],
            frozen=True,
            forbid_unknown_fields=True,
            array_like=True,
        )

    @property
    def repeated(self) -> str:
        return self.spec.repeated

    def compare_fields(self, fields: tuple[str, ...]) -> str:
        """
        Compare a record shape against the schema.

        Returns:
            An empty string when both declare the same fields, otherwise a
            diagnostic naming the missing and undeclared fields.
        """
        missing = [name for name in self.field_names if name not in fields]
        undeclared = [name for name in fields if name not in self.field_names]
        problems = []
        if missing:
            problems.append(f"fields required by schema are missing: {', '.join(missing)}")
        if undeclared:
            problems.append(f"fields not declared in schema: {', '.join(undeclared)}")
        return "; ".join(problems)

    def to_message(self, records: Any) -> Any:
        """
        Validate records against the schema and build a message.

        Raises:
            msgspec.ValidationError: If a value does not match its field type.
            AttributeError: If a record lacks a schema field.
        """
        rows = [[getattr(record, name) for name in self.field_names] for record in records]
        return msgspec.convert([rows], self.message_type)

    def __repr__(self) -> str:
        return f"Schema({self.spec.message}, fields={list(self.field_names)}, source={self.source!r})"


def _default_schema_bytes() -> tuple[bytes, str]:
    resource = resources.files("serde_bench") / "schemas" / "employees.json"
    return resource.read_bytes(), "serde_bench/schemas/employees.json"


def load_schema(path: Path | str | None = None) -> Schema:
    """
    Load and validate a schema resource.

    Args:
        path: Path to a JSON schema file. When omitted the bundled
            ``employees.json`` schema is used.

    Returns:
        The loaded Schema.

    Raises:
        SchemaLoadError: If the resource is missing, is not valid JSON, or
            does not describe a usable schema.
    """
    try:
        if path is None:
            data, source = _default_schema_bytes()
        else:
            source = str(path)
            data = Path(path).read_bytes()
    except OSError as exc:
        raise SchemaLoadError(f"cannot read schema {path}: {exc}") from exc

    try:
        spec = msgspec.json.decode(data, type=SchemaSpec)
    except msgspec.DecodeError as exc:
        raise SchemaLoadError(f"malformed schema {source}: {exc}") from exc

    names = [field.name for field in spec.record.fields]
    if not names:
        raise SchemaLoadError(f"schema {source} declares no record fields")
    if len(set(names)) != len(names):
        raise SchemaLoadError(f"schema {source} declares duplicate fields: {names}")
    for name in [spec.message, spec.repeated, spec.record.name, *names]:
        if not name.isidentifier():
            raise SchemaLoadError(f"schema {source} uses an invalid name: {name!r}")

    schema = Schema(spec, source)
    logger.info("Loaded schema %s", schema)
    return schema

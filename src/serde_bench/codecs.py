"""Codec adapters: one serialization format each, behind a uniform contract.

Every codec encodes the whole document (including any wrapping element) and
every decode materializes ``Record`` objects again, so timings compare the
same amount of work across formats.
"""

import json
import re
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from typing import NamedTuple

import msgpack
import msgspec
import orjson
from defusedxml import DefusedXmlException
from defusedxml.ElementTree import fromstring as parse_xml
from msgpack.exceptions import UnpackException

from serde_bench.errors import DecodeError, EncodeError, SchemaLoadError
from serde_bench.records import ROOT_FIELD, Dataset, Record, to_rows
from serde_bench.schema import Schema

XML_ROOT_TAG = "root"

# Characters outside the XML 1.0 Char production.
XML_FORBIDDEN = re.compile(r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


class Verdict(NamedTuple):
    """Outcome of a schema check. Truthy iff the dataset conforms."""

    ok: bool
    diagnostic: str = ""

    def __bool__(self) -> bool:
        return self.ok


PASS = Verdict(True)


def _records_from_rows(codec: str, rows: object, strict: bool = True) -> Dataset:
    """Validate decoded rows and turn them into records."""
    try:
        decoded = tuple(msgspec.convert(rows, list[Record], strict=strict))
    except msgspec.ValidationError as exc:
        raise DecodeError(codec, f"decoded data does not describe records: {exc}") from exc
    seen = set()
    for record in decoded:
        if record.id in seen:
            raise DecodeError(codec, f"duplicate record id {record.id}")
        seen.add(record.id)
    return decoded


def _unwrap(codec: str, payload: object) -> object:
    if not isinstance(payload, dict) or ROOT_FIELD not in payload:
        raise DecodeError(codec, f"expected an object with an {ROOT_FIELD!r} field")
    return payload[ROOT_FIELD]


class Codec(ABC):
    """Abstract base class for codec adapters."""

    name: str = ""
    has_schema: bool = False

    @abstractmethod
    def encode(self, dataset: Dataset) -> bytes:
        """Encode the dataset. Raises EncodeError on structural violations."""

    @abstractmethod
    def decode(self, data: bytes) -> Dataset:
        """Decode bytes back into records. Raises DecodeError on bad input."""

    def verify(self, dataset: Dataset) -> Verdict:
        """Check the dataset against the codec's schema, if it has one."""
        return PASS

    def size(self, dataset: Dataset) -> int:
        """Size in bytes of one encoding of the dataset."""
        return len(self.encode(dataset))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class JsonCodec(Codec):
    """Compact JSON via the standard library. The usual baseline."""

    name = "json"

    def encode(self, dataset: Dataset) -> bytes:
        try:
            return json.dumps({ROOT_FIELD: to_rows(dataset)}, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise EncodeError(self.name, str(exc)) from exc

    def decode(self, data: bytes) -> Dataset:
        try:
            payload = json.loads(data)
        except (UnicodeDecodeError, ValueError, RecursionError) as exc:
            raise DecodeError(self.name, f"malformed JSON: {exc}") from exc
        return _records_from_rows(self.name, _unwrap(self.name, payload))


class OrjsonCodec(Codec):
    """JSON through orjson."""

    name = "orjson"

    def encode(self, dataset: Dataset) -> bytes:
        try:
            return orjson.dumps({ROOT_FIELD: to_rows(dataset)})
        except orjson.JSONEncodeError as exc:
            raise EncodeError(self.name, str(exc)) from exc

    def decode(self, data: bytes) -> Dataset:
        try:
            payload = orjson.loads(data)
        except orjson.JSONDecodeError as exc:
            raise DecodeError(self.name, f"malformed JSON: {exc}") from exc
        return _records_from_rows(self.name, _unwrap(self.name, payload))


class XmlCodec(Codec):
    """Tagged markup: one element per record, one child element per field."""

    name = "xml"

    def encode(self, dataset: Dataset) -> bytes:
        root = ET.Element(XML_ROOT_TAG)
        for row in to_rows(dataset):
            element = ET.SubElement(root, ROOT_FIELD)
            for key, value in row.items():
                text = str(value)
                bad = XML_FORBIDDEN.search(text)
                if bad:
                    raise EncodeError(self.name, f"{key} contains {bad.group()!r}, which XML 1.0 cannot represent")
                ET.SubElement(element, key).text = text
        # ElementTree leaves carriage returns raw and parsers normalize them
        # to newlines. Tags are fixed, so any CR here sits in element text.
        return ET.tostring(root, encoding="unicode").replace("\r", "&#13;").encode("utf-8")

    def decode(self, data: bytes) -> Dataset:
        try:
            root = parse_xml(data)
        except (ET.ParseError, DefusedXmlException) as exc:
            raise DecodeError(self.name, f"malformed XML: {exc}") from exc
        if root.tag != XML_ROOT_TAG:
            raise DecodeError(self.name, f"expected <{XML_ROOT_TAG}> document, got <{root.tag}>")
        rows = [{child.tag: child.text for child in element} for element in root.findall(ROOT_FIELD)]
        # Element text is always a string; let msgspec parse numbers.
        return _records_from_rows(self.name, rows, strict=False)


class MsgpackCodec(Codec):
    """Schemaless MessagePack through the msgpack library."""

    name = "msgpack"

    def encode(self, dataset: Dataset) -> bytes:
        try:
            return msgpack.packb({ROOT_FIELD: to_rows(dataset)})
        except (TypeError, ValueError) as exc:
            raise EncodeError(self.name, str(exc)) from exc

    def decode(self, data: bytes) -> Dataset:
        try:
            payload = msgpack.unpackb(data)
        except (TypeError, ValueError, UnpackException) as exc:
            raise DecodeError(self.name, f"malformed MessagePack: {exc}") from exc
        return _records_from_rows(self.name, _unwrap(self.name, payload))


class SchemaMsgpackCodec(Codec):
    """
    Schema-validated binary codec.

    Records are checked against a loaded ``Schema`` before encoding and
    written as positional MessagePack arrays, so field names never appear in
    the output. Decoding validates the bytes against the same schema.
    """

    name = "schema-msgpack"
    has_schema = True

    def __init__(self, schema: Schema):
        self.schema = schema
        self._shape_error = schema.compare_fields(Record.__struct_fields__)
        self._encoder = msgspec.msgpack.Encoder()
        self._decoder = msgspec.msgpack.Decoder(schema.message_type)

    def verify(self, dataset: Dataset) -> Verdict:
        if self._shape_error:
            return Verdict(False, self._shape_error)
        try:
            self.schema.to_message(dataset)
        except (AttributeError, msgspec.ValidationError) as exc:
            return Verdict(False, str(exc))
        return PASS

    def encode(self, dataset: Dataset) -> bytes:
        if self._shape_error:
            raise EncodeError(self.name, self._shape_error)
        try:
            message = self.schema.to_message(dataset)
        except (AttributeError, msgspec.ValidationError) as exc:
            raise EncodeError(self.name, f"dataset does not match schema: {exc}") from exc
        return self._encoder.encode(message)

    def decode(self, data: bytes) -> Dataset:
        try:
            message = self._decoder.decode(data)
        except msgspec.DecodeError as exc:
            raise DecodeError(self.name, f"malformed message: {exc}") from exc
        items = getattr(message, self.schema.repeated)
        rows = [msgspec.structs.asdict(item) for item in items]
        return _records_from_rows(self.name, rows)


CODECS: dict[str, type[Codec]] = {
    codec.name: codec
    for codec in (JsonCodec, XmlCodec, SchemaMsgpackCodec, MsgpackCodec, OrjsonCodec)
}

DEFAULT_CODECS = ("json", "xml", "schema-msgpack")


def available_codecs() -> list[str]:
    return list(CODECS)


def needs_schema(names: list[str] | tuple[str, ...]) -> bool:
    """Whether any of the named codecs requires a loaded schema."""
    return any(CODECS[name].has_schema for name in names if name in CODECS)


def build_codecs(names: list[str] | tuple[str, ...], schema: Schema | None = None) -> list[Codec]:
    """
    Instantiate codecs by name, in the given order.

    Raises:
        KeyError: If a name is not registered.
        SchemaLoadError: If a schema-aware codec is requested without a schema.
    """
    codecs = []
    for name in names:
        if name not in CODECS:
            raise KeyError(f"unknown codec {name!r}; available: {', '.join(CODECS)}")
        cls = CODECS[name]
        if cls.has_schema:
            if schema is None:
                raise SchemaLoadError(f"codec {name!r} requires a schema")
            codecs.append(cls(schema))
        else:
            codecs.append(cls())
    return codecs

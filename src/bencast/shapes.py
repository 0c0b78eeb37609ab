"""
Destination shape descriptors.

A shape tells the projector what a destination looks like: a scalar kind,
a container of other shapes, or a record with an explicit list of fields.
Records are usually derived from dataclasses with `record_of`, which reads the
field list, the type hints and the `bencode` metadata tag once per class.
"""
import dataclasses
import threading
import types
from collections import abc
from typing import Annotated, Any, Dict, List, Union, get_args, get_origin, get_type_hints

from .config import TAG_KEY, TAG_SKIP, TEXT_ENCODING, TEXT_ERRORS
from .structure import BencodeType

__all__ = [
    "Shape", "Text", "Int", "Bool", "Float", "Bytes", "Seq", "Map",
    "Field", "Record", "Boxed", "AnyValue", "Unsupported",
    "TEXT", "INT", "INT8", "INT16", "INT32", "INT64",
    "UINT", "UINT8", "UINT16", "UINT32", "UINT64",
    "BOOL", "FLOAT", "BYTES", "ANY",
    "record_of", "shape_of",
]


class Shape:
    """Base class for destination shapes."""
    name = "value"

    def __repr__(self):
        return self.name


class Text(Shape):
    name = "text"

    def __init__(self, encoding: str = TEXT_ENCODING, errors: str = TEXT_ERRORS):
        self.encoding = encoding
        self.errors = errors


class Int(Shape):
    def __init__(self, bits: int = 64, signed: bool = True):
        self.bits = bits
        self.signed = signed
        if signed:
            self.lo, self.hi = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        else:
            self.lo, self.hi = 0, (1 << bits) - 1

    @property
    def name(self):
        return f"{'int' if self.signed else 'uint'}{self.bits}"


class Bool(Shape):
    name = "bool"


class Float(Shape):
    name = "float"


class Bytes(Shape):
    name = "bytes"


class Seq(Shape):
    def __init__(self, elem: Shape):
        self.elem = elem

    @property
    def name(self):
        return f"list[{self.elem.name}]"


class Map(Shape):
    def __init__(self, key: Shape, value: Shape):
        self.key = key
        self.value = value

    @property
    def name(self):
        return f"dict[{self.key.name}, {self.value.name}]"


class Field:
    """
    One record field: the attribute to set, its shape, and the optional tag.
    The tag's text before the first comma is the wire name; "-" skips the field.
    """
    __slots__ = ("attr", "shape", "tag")

    def __init__(self, attr: str, shape: Shape, tag: str = None):
        self.attr = attr
        self.shape = shape
        self.tag = tag

    @property
    def wire_name(self) -> str:
        if self.tag:
            name = self.tag.split(",", 1)[0]
            if name:
                return name
        return self.attr

    @property
    def skipped(self) -> bool:
        # attributes with a leading underscore are private
        return self.attr.startswith("_") or self.wire_name == TAG_SKIP

    def __repr__(self):
        return f"Field({self.attr!r}, {self.shape!r}, wire={self.wire_name!r})"


class Record(Shape):
    def __init__(self, cls: type, fields: List[Field] = None):
        self.cls = cls
        self.fields = list(fields or [])

    @property
    def name(self):
        return self.cls.__name__


class Boxed(Shape):
    """A value that may be absent (None) and is allocated on demand."""
    def __init__(self, inner: Shape):
        self.inner = inner

    @property
    def name(self):
        return f"optional[{self.inner.name}]"


class AnyValue(Shape):
    """Open slot: receives the decoded BencodeType node itself."""
    name = "any"


class Unsupported(Shape):
    def __init__(self, tp):
        self.tp = tp

    @property
    def name(self):
        return getattr(self.tp, "__name__", repr(self.tp))


TEXT = Text()
INT = INT64 = Int(64)
INT8, INT16, INT32 = Int(8), Int(16), Int(32)
UINT = UINT64 = Int(64, signed=False)
UINT8, UINT16, UINT32 = Int(8, signed=False), Int(16, signed=False), Int(32, signed=False)
BOOL = Bool()
FLOAT = Float()
BYTES = Bytes()
ANY = AnyValue()


_records: Dict[type, Record] = {}
# re-entrant: self-referencing classes come back through shape_of on the same thread
_records_lock = threading.RLock()

_SEQUENCE_ORIGINS = (list, abc.Sequence, abc.MutableSequence)
_MAPPING_ORIGINS = (dict, abc.Mapping, abc.MutableMapping)
_UNION_TYPES = (Union, types.UnionType)


def record_of(cls: type) -> Record:
    """Builds (once) the field-descriptor list for a dataclass."""
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError(f"record_of expects a dataclass type, not {cls!r}")

    with _records_lock:
        if cls in _records:
            return _records[cls]

        # registered before resolving fields so self-referencing classes terminate
        record = _records[cls] = Record(cls)
        try:
            hints = get_type_hints(cls, include_extras=True)
            for f in dataclasses.fields(cls):
                record.fields.append(Field(f.name, shape_of(hints.get(f.name, Any)), f.metadata.get(TAG_KEY)))
        except Exception:
            del _records[cls]
            raise
        return record


def shape_of(tp) -> Shape:
    """Maps a Python annotation to a Shape."""
    if isinstance(tp, Shape):
        return tp
    if tp is Any:
        return ANY

    origin = get_origin(tp)
    args = get_args(tp)

    if origin is Annotated:
        for meta in args[1:]:
            if isinstance(meta, Shape):
                return meta
        return shape_of(args[0])

    if origin in _UNION_TYPES:
        rest = [a for a in args if a is not type(None)]
        if len(rest) == 1 and len(rest) < len(args):
            return Boxed(shape_of(rest[0]))
        return Unsupported(tp)

    if origin in _SEQUENCE_ORIGINS:
        return Seq(shape_of(args[0]) if args else ANY)
    if origin in _MAPPING_ORIGINS:
        return Map(shape_of(args[0]), shape_of(args[1])) if args else Map(TEXT, ANY)

    # bool before int: bool is an int subclass
    if tp is bool:
        return BOOL
    if tp is int:
        return INT
    if tp is float:
        return FLOAT
    if tp is str:
        return TEXT
    if tp in (bytes, bytearray):
        return BYTES
    if tp is list:
        return Seq(ANY)
    if tp is dict:
        return Map(TEXT, ANY)
    if isinstance(tp, type) and issubclass(tp, BencodeType):
        return ANY
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return record_of(tp)
    return Unsupported(tp)

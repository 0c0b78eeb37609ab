"""
Projects decoded Bencode values onto destination shapes.
"""
import re
from collections import abc

from .config import TEXT_ENCODING
from .errors import TypeMismatch, UnsupportedType
from .shapes import (UINT8, AnyValue, Bool, Boxed, Bytes, Float, Int, Map, Record, Seq, Shape, Text,
                     Unsupported)
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeNothing, BencodeString, BencodeType

__all__ = ["project"]

# decimal text accepted for signed integers stored as byte strings
_NUMERIC = re.compile(rb"[+-]?[0-9]+")


def project(value: BencodeType, shape: Shape, current=None, path: str = ""):
    """
    Converts `value` into the Python form described by `shape`.

    Records and mappings given in `current` are filled in place and returned;
    everything else is returned as a new object for the caller to store.
    """
    for cls in type(shape).__mro__:
        handler = _HANDLERS.get(cls)
        if handler is not None:
            return handler(value, shape, current, path)
    raise UnsupportedType(f"no projection rule for {shape!r}", path)


def _mismatch(value: BencodeType, shape: Shape, path: str):
    return TypeMismatch(f"cannot set {shape.name} from {value.kind}", path)


def _text(value, shape: Text, current, path):
    if not isinstance(value, BencodeString):
        raise _mismatch(value, shape, path)
    return value.value.decode(shape.encoding, shape.errors)


def _int(value, shape: Int, current, path):
    if isinstance(value, BencodeInt):
        num = value.value
    elif isinstance(value, BencodeString) and shape.signed and _NUMERIC.fullmatch(value.value):
        num = int(value.value)
    else:
        raise _mismatch(value, shape, path)

    if not shape.lo <= num <= shape.hi:
        raise TypeMismatch(f"{num} is out of range for {shape.name}", path)
    return num


def _bool(value, shape: Bool, current, path):
    if not isinstance(value, BencodeInt):
        raise _mismatch(value, shape, path)
    return value.value != 0


def _float(value, shape: Float, current, path):
    if not isinstance(value, BencodeInt):
        raise _mismatch(value, shape, path)
    return float(value.value)


def _bytes(value, shape: Bytes, current, path):
    if isinstance(value, BencodeString):
        return value.value
    if isinstance(value, BencodeList):
        return bytes(project(item, UINT8, None, f"{path}[{i}]") for i, item in enumerate(value.value))
    raise _mismatch(value, shape, path)


def _seq(value, shape: Seq, current, path):
    if isinstance(value, BencodeList):
        return [project(item, shape.elem, None, f"{path}[{i}]") for i, item in enumerate(value.value)]

    # a list of single bytes may arrive as a byte string
    elem = shape.elem
    if isinstance(value, BencodeString) and isinstance(elem, Int) and elem.bits == 8 and not elem.signed:
        return list(value.value)
    raise _mismatch(value, shape, path)


def _map(value, shape: Map, current, path):
    if not isinstance(value, BencodeDict):
        raise _mismatch(value, shape, path)

    if current is None:
        target = {}
    elif isinstance(current, abc.MutableMapping):
        target = current
    else:
        raise UnsupportedType(f"cannot fill {type(current).__name__} as {shape.name}", path)

    for raw_key, item in value.value.items():
        key = project(BencodeString(raw_key), shape.key, None, f"{path}<key {raw_key!r}>")
        target[key] = project(item, shape.value, None, f"{path}[{raw_key.decode(TEXT_ENCODING, 'replace')!r}]")
    return target


def _record(value, shape: Record, current, path):
    if not isinstance(value, BencodeDict):
        raise _mismatch(value, shape, path)

    if current is None:
        obj = _allocate(shape, path)
    elif isinstance(current, shape.cls):
        obj = current
    else:
        raise UnsupportedType(f"cannot fill {type(current).__name__} as {shape.name}", path)

    entries = value.value
    for field in shape.fields:
        if field.skipped:
            continue
        key = field.wire_name.encode(TEXT_ENCODING)
        if key not in entries:
            continue
        sub_path = f"{path}.{field.attr}" if path else field.attr
        setattr(obj, field.attr, project(entries[key], field.shape, getattr(obj, field.attr, None), sub_path))
    return obj


def _allocate(shape: Record, path: str):
    try:
        return shape.cls()
    except TypeError as exc:
        raise UnsupportedType(f"cannot allocate {shape.name} without arguments", path) from exc


def _boxed(value, shape: Boxed, current, path):
    if isinstance(value, BencodeNothing):
        return None
    return project(value, shape.inner, current, path)


def _any(value, shape: AnyValue, current, path):
    return value


def _unsupported(value, shape: Unsupported, current, path):
    raise UnsupportedType(f"unsupported destination type {shape.name}", path)


_HANDLERS = {
    Text: _text,
    Int: _int,
    Bool: _bool,
    Float: _float,
    Bytes: _bytes,
    Seq: _seq,
    Map: _map,
    Record: _record,
    Boxed: _boxed,
    AnyValue: _any,
    Unsupported: _unsupported,
}

"""
Entry points: decode a whole buffer or byte source and fill a destination with it.
"""
import asyncio
import dataclasses
import logging

import aiohttp

from .decoder import BencodeDecoder
from .errors import EmptyInput, UnsupportedType
from .projector import project
from .shapes import ANY, TEXT, Map, Seq, Shape, record_of, shape_of
from .structure import BencodeList, BencodeType

__all__ = ["Box", "unmarshal", "loads", "load", "load_async"]

logger = logging.getLogger(__name__)


class Box:
    """
    Mutable holder for a scalar destination.

        >>> n = unmarshal(b"i42e", Box(int))
        >>> n.value
        42
    """
    def __init__(self, shape=ANY, value=None):
        self.shape = shape_of(shape)
        self.value = value

    def __repr__(self):
        return f"Box({self.shape!r}, value={self.value!r})"


def _root_value(data: bytes) -> BencodeType:
    if not data:
        raise EmptyInput()
    values = BencodeDecoder(data).decode_all()
    if len(values) == 1:
        return values[0]
    # back-to-back messages are treated as one list
    return BencodeList(values)


def _shape_for(dest) -> Shape:
    if isinstance(dest, Box):
        return dest.shape
    if dataclasses.is_dataclass(dest) and not isinstance(dest, type):
        return record_of(type(dest))
    if isinstance(dest, list):
        return Seq(ANY)
    if isinstance(dest, dict):
        return Map(TEXT, ANY)
    raise UnsupportedType(f"cannot fill {type(dest).__name__} in place; pass a dataclass, list, dict or Box")


def unmarshal(data: bytes, dest, shape=None):
    """
    Decodes every top-level value in `data` and projects the result onto `dest`.

    `dest` is filled in place and returned. When `shape` is omitted it is
    derived from `dest`: a dataclass instance uses its fields, a list holds
    raw values, a dict maps text keys to raw values, a Box uses its own shape.
    """
    shape = _shape_for(dest) if shape is None else shape_of(shape)
    root = _root_value(data)
    logger.debug("Projecting %s onto %r", root.kind, shape)

    if isinstance(dest, Box):
        dest.value = project(root, shape, dest.value)
        return dest

    result = project(root, shape, dest)
    if result is dest:
        return dest
    if isinstance(dest, list) and isinstance(result, list):
        dest[:] = result
        return dest
    raise UnsupportedType(f"cannot fill {type(dest).__name__} in place with {shape.name}")


def loads(data: bytes, shape):
    """Decodes `data` and returns a new value of the given shape."""
    return project(_root_value(data), shape_of(shape))


def load(source, dest, shape=None):
    """Reads a closable byte source to the end, closes it, and unmarshals it into `dest`."""
    try:
        data = source.read()
    finally:
        source.close()
    logger.debug("Read %d bytes from %r", len(data), source)
    return unmarshal(data, dest, shape)


async def load_async(source, dest, shape=None):
    """
    Async counterpart of `load` for an aiohttp response or an asyncio stream.
    The response's connection is released once the body is read.
    """
    if isinstance(source, aiohttp.ClientResponse):
        try:
            data = await source.read()
        finally:
            source.release()
    elif isinstance(source, asyncio.StreamReader):
        data = await source.read()
    else:
        raise TypeError(f"load_async expects aiohttp.ClientResponse or asyncio.StreamReader, not {type(source).__name__}")
    logger.debug("Read %d bytes from %s", len(data), type(source).__name__)
    return unmarshal(data, dest, shape)

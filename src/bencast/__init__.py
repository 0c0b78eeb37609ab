"""
Bencode decoding with projection onto dataclasses, lists, dicts and boxed scalars.
"""
from .decoder import BencodeDecoder, decode, decode_all, raw_value_span
from .errors import *
from .errors import __all__ as _errors_all
from .shapes import *
from .shapes import __all__ as _shapes_all
from .structure import NOTHING, BencodeDict, BencodeInt, BencodeList, BencodeNothing, BencodeString, BencodeType
from .projector import project
from .unmarshal import Box, load, load_async, loads, unmarshal

__all__ = [
    'decode', 'decode_all', 'raw_value_span', 'BencodeDecoder',
    'BencodeType', 'BencodeNothing', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict', 'NOTHING',
    'project', 'Box', 'unmarshal', 'loads', 'load', 'load_async',
] + _errors_all + _shapes_all

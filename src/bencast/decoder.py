"""
Bencode decoder for BitTorrent metainfo, tracker responses and peer messages.
"""
import logging
from typing import List

from .config import INT64_MAX, INT64_MIN
from .cursor import Cursor
from .errors import (BencodeDecodeError, InvalidInteger, KeyMustBeString, MalformedLength, TrailingData,
                     TruncatedString, UnexpectedEnd, UnknownToken)
from .structure import NOTHING, BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

logger = logging.getLogger(__name__)

TOKEN_INTEGER = ord("i")
TOKEN_LIST = ord("l")
TOKEN_DICT = ord("d")
TOKEN_END = ord("e")
TOKEN_COLON = ord(":")
TOKEN_MINUS = ord("-")
DIGIT_ZERO = ord("0")
DIGIT_NINE = ord("9")


def _is_digit(ch) -> bool:
    return ch is not None and DIGIT_ZERO <= ch <= DIGIT_NINE


class BencodeDecoder:
    """
    Decodes Bencoded byte strings into BencodeType trees.
    """
    def __init__(self, data: bytes):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"BencodeDecoder expects bytes, not {type(data).__name__}")
        self.cursor = Cursor(bytes(data))

    def decode(self) -> BencodeType:
        """Decodes the single value starting at the cursor."""
        return self._parse_value()

    def decode_all(self) -> List[BencodeType]:
        """Decodes back-to-back top-level values until the buffer is exhausted."""
        results = []
        while not self.cursor.exhausted:
            results.append(self._parse_value())
        logger.debug("Decoded %d top-level value(s) from %d bytes", len(results), len(self.cursor.data))
        return results

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self) -> BencodeType:
        """
        Dispatches on the first byte. Past the end of the buffer this yields
        NOTHING; a literal NUL byte inside the buffer is an UnknownToken, so
        the top-level loop in decode_all always moves forward.
        """
        ch = self.cursor.peek()

        if ch is None:
            return NOTHING

        if _is_digit(ch):  # Bencode strings start with length, which is a digit
            return self._parse_string()

        if ch == TOKEN_INTEGER:
            return self._parse_int()

        if ch == TOKEN_LIST:
            return self._parse_list()

        if ch == TOKEN_DICT:
            return self._parse_dict()

        raise UnknownToken(ch, self.cursor.pos)

    def _parse_string(self) -> BencodeString:
        """Parses a byte string from the Bencoded data."""
        cur = self.cursor
        length = 0

        # read length until ':'
        while (ch := cur.peek()) != TOKEN_COLON:
            if ch is None:
                raise UnexpectedEnd("Unexpected end of input while reading string length", cur.pos)
            if not _is_digit(ch):
                raise MalformedLength(f"Invalid character {bytes([ch])!r} in string length", cur.pos)
            length = length * 10 + (ch - DIGIT_ZERO)
            cur.advance()

        cur.advance()  # skip ':'

        if length > cur.remaining:
            raise TruncatedString(
                f"String declares {length} bytes but only {cur.remaining} remain", cur.pos)

        return BencodeString(cur.take(length))

    def _parse_int(self) -> BencodeInt:
        """Parses an integer from the Bencoded data."""
        cur = self.cursor
        cur.advance()  # skip 'i'
        start = cur.pos

        if cur.peek() == TOKEN_MINUS:
            cur.advance()

        digits_start = cur.pos
        while (ch := cur.peek()) != TOKEN_END:
            if ch is None:
                raise UnexpectedEnd("Unexpected end of input while reading integer", cur.pos)
            if not _is_digit(ch):
                raise InvalidInteger(f"Invalid character {bytes([ch])!r} in integer", cur.pos)
            cur.advance()

        if cur.pos == digits_start:
            raise InvalidInteger("Integer has no digits", start)

        num = int(cur.data[start:cur.pos])
        if not INT64_MIN <= num <= INT64_MAX:
            raise InvalidInteger("Integer does not fit in 64 bits", start)

        cur.advance()  # skip 'e'
        return BencodeInt(num)

    def _parse_list(self) -> BencodeList:
        """Parses a list from the Bencoded data."""
        cur = self.cursor
        cur.advance()  # skip 'l'
        items = []

        while (ch := cur.peek()) != TOKEN_END:
            if ch is None:
                raise UnexpectedEnd("Unexpected end of input while reading list", cur.pos)
            items.append(self._parse_value())

        cur.advance()  # skip 'e'
        return BencodeList(items)

    def _parse_dict(self) -> BencodeDict:
        """Parses a dictionary from the Bencoded data."""
        cur = self.cursor
        cur.advance()  # skip 'd'
        obj = {}

        while (ch := cur.peek()) != TOKEN_END:
            if ch is None:
                raise UnexpectedEnd("Unexpected end of input while reading dictionary", cur.pos)
            # keys MUST be strings
            if not _is_digit(ch):
                raise KeyMustBeString("Dictionary key must be a byte string", cur.pos)
            key = self._parse_string().value
            obj[key] = self._parse_value()

        cur.advance()  # skip 'e'
        return BencodeDict(obj)


def decode(data: bytes) -> BencodeType:
    """
    Convenience function to decode exactly one Bencoded value.
    """
    decoder = BencodeDecoder(data)
    result = decoder.decode()
    if not decoder.cursor.exhausted:
        raise TrailingData(f"{decoder.cursor.remaining} trailing byte(s) after value", decoder.cursor.pos)
    return result


def decode_all(data: bytes) -> List[BencodeType]:
    """Decodes every top-level value in data, in order."""
    return BencodeDecoder(data).decode_all()


def raw_value_span(data: bytes, key: bytes) -> bytes:
    """
    Returns the exact encoded bytes of `key`'s value in the top-level dictionary.
    Needed for the BitTorrent info-hash, which is taken over the original bytes.
    """
    decoder = BencodeDecoder(data)
    cur = decoder.cursor
    if cur.peek() != TOKEN_DICT:
        raise BencodeDecodeError("Top-level value is not a dictionary", cur.pos)
    cur.advance()  # skip 'd'

    while (ch := cur.peek()) != TOKEN_END:
        if ch is None:
            raise UnexpectedEnd("Unexpected end of input while reading dictionary", cur.pos)
        if not _is_digit(ch):
            raise KeyMustBeString("Dictionary key must be a byte string", cur.pos)
        name = decoder._parse_string().value
        start = cur.pos
        decoder._parse_value()
        if name == key:
            return cur.data[start:cur.pos]

    raise KeyError(key)

"""
Data structures for representing decoded Bencode values.
"""
from .config import INT64_MAX, INT64_MIN

__all__ = [
    "BencodeType",
    "BencodeNothing",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "NOTHING",
]


class BencodeType:
    """Base class for all Bencode data types."""
    __slots__ = ("value",)
    kind = "value"

    def to_python(self):
        """Plain Python form: int, bytes, list or dict with bytes keys."""
        return self.value

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return hash((type(self), self.value))

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"


class BencodeNothing(BencodeType):
    """Absence marker, produced when decoding is asked for a value past the end."""
    kind = "nothing"

    def __init__(self):
        self.value = None

    def __repr__(self):
        return "NOTHING"


NOTHING = BencodeNothing()


class BencodeInt(BencodeType):
    """Represents a Bencoded integer."""
    kind = "integer"

    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError("BencodeInt must fit in 64 bits.")
        self.value = value


class BencodeString(BencodeType):
    """Represents a Bencoded byte string."""
    kind = "byte string"

    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError("BencodeString requires bytes.")
        self.value = bytes(value)


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    kind = "list"
    __hash__ = None

    def __init__(self, value: list):
        if not isinstance(value, list):
            raise TypeError("BencodeList requires a list.")
        self.value = value

    def to_python(self):
        return [item.to_python() for item in self.value]


class BencodeDict(BencodeType):
    """Represents a Bencoded dictionary."""
    kind = "dict"
    __hash__ = None

    def __init__(self, value: dict):
        if not isinstance(value, dict):
            raise TypeError("BencodeDict requires a dict.")
        # keys must be bytes (bencode requirement)
        for k in value.keys():
            if not isinstance(k, (bytes, bytearray)):
                raise TypeError("BencodeDict keys must be bytes.")
        self.value = value

    def to_python(self):
        return {k: v.to_python() for k, v in self.value.items()}

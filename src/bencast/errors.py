"""
Exceptions raised while decoding Bencode data and projecting it onto destinations.
"""
__all__ = [
    "BencodeError",
    "BencodeDecodeError",
    "MalformedLength",
    "InvalidInteger",
    "UnexpectedEnd",
    "TruncatedString",
    "KeyMustBeString",
    "UnknownToken",
    "TrailingData",
    "EmptyInput",
    "ProjectionError",
    "TypeMismatch",
    "UnsupportedType",
]


class BencodeError(Exception):
    """Base class for every error raised by bencast."""


class BencodeDecodeError(BencodeError, ValueError):
    """The byte stream is not valid Bencode."""
    def __init__(self, message: str, pos: int = None):
        if pos is not None:
            message = f"{message} (at index {pos})"
        super().__init__(message)
        self.pos = pos


class MalformedLength(BencodeDecodeError):
    pass


class InvalidInteger(BencodeDecodeError):
    pass


class UnexpectedEnd(BencodeDecodeError):
    pass


class TruncatedString(BencodeDecodeError):
    pass


class KeyMustBeString(BencodeDecodeError):
    pass


class UnknownToken(BencodeDecodeError):
    def __init__(self, token: int, pos: int):
        super().__init__(f"Unknown token {bytes([token])!r}", pos)
        self.token = token


class TrailingData(BencodeDecodeError):
    pass


class EmptyInput(BencodeDecodeError, EOFError):
    def __init__(self, message: str = "Source yielded no bytes"):
        super().__init__(message)


class ProjectionError(BencodeError, TypeError):
    """A decoded value cannot be placed into the destination."""
    def __init__(self, message: str, path: str = ""):
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
        self.path = path


class TypeMismatch(ProjectionError):
    pass


class UnsupportedType(ProjectionError):
    pass

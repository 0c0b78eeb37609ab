__all__ = [
    'TAG_KEY',
    'TAG_SKIP',
    'TEXT_ENCODING',
    'TEXT_ERRORS',
    'INT64_MIN',
    'INT64_MAX',
    ]

# dataclass field(metadata=...) key holding the wire name
TAG_KEY: str = 'bencode'
TAG_SKIP: str = '-'

TEXT_ENCODING: str = 'utf-8'
TEXT_ERRORS: str = 'surrogateescape'

INT64_MIN: int = -(1 << 63)
INT64_MAX: int = (1 << 63) - 1

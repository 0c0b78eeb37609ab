"""
Torrent metainfo (.torrent) records filled by the projector.
"""
import hashlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .decoder import raw_value_span
from .unmarshal import unmarshal

__all__ = ["FileEntry", "Info", "Metainfo", "parse_metainfo", "load_metainfo"]

logger = logging.getLogger(__name__)

PIECE_HASH_LEN = 20


@dataclass
class FileEntry:
    length: int = 0
    path: List[str] = field(default_factory=list)
    md5sum: Optional[str] = None


@dataclass
class Info:
    name: str = ""
    piece_length: int = field(default=0, metadata={"bencode": "piece length"})
    pieces: bytes = b""
    length: Optional[int] = None
    files: Optional[List[FileEntry]] = None
    private: bool = False

    @property
    def is_multi_file(self) -> bool:
        return self.files is not None

    @property
    def total_length(self) -> int:
        if self.files is not None:
            return sum(f.length for f in self.files)
        return self.length or 0

    def piece_hashes(self) -> List[bytes]:
        """Splits `pieces` into its 20-byte SHA-1 digests."""
        if len(self.pieces) % PIECE_HASH_LEN:
            raise ValueError("Invalid torrent: pieces is not a multiple of 20 bytes")
        return [self.pieces[i:i + PIECE_HASH_LEN] for i in range(0, len(self.pieces), PIECE_HASH_LEN)]

    @property
    def last_piece_length(self) -> int:
        if self.piece_length <= 0:
            return 0
        return (self.total_length % self.piece_length) or self.piece_length


@dataclass
class Metainfo:
    announce: Optional[str] = None
    announce_list: Optional[List[List[str]]] = field(default=None, metadata={"bencode": "announce-list"})
    comment: Optional[str] = None
    created_by: Optional[str] = field(default=None, metadata={"bencode": "created by"})
    creation_date: Optional[int] = field(default=None, metadata={"bencode": "creation date"})
    encoding: Optional[str] = None
    info: Info = field(default_factory=Info)
    info_hash: bytes = field(default=b"", metadata={"bencode": "-"})

    def trackers(self) -> List[str]:
        """Announce URLs in tier order, without duplicates."""
        urls = []
        for tier in self.announce_list or []:
            urls.extend(u for u in tier if u not in urls)
        if self.announce and self.announce not in urls:
            urls.insert(0, self.announce)
        return urls

    def __repr__(self):
        files = len(self.info.files) if self.info.files is not None else 1
        return (
            f"Metainfo(name={self.info.name!r}, files={files}, pieces={len(self.info.pieces) // PIECE_HASH_LEN}, "
            f"multi={self.info.is_multi_file}, announce={self.announce!r})"
        )


def parse_metainfo(raw: bytes) -> Metainfo:
    """
    Decodes a .torrent file's bytes. The info-hash is the SHA-1 of the
    `info` value exactly as it appears in `raw`.
    """
    meta = unmarshal(raw, Metainfo())
    try:
        info_bytes = raw_value_span(raw, b"info")
    except KeyError:
        raise ValueError("Torrent missing 'info' dictionary") from None
    if meta.info.piece_length <= 0:
        raise ValueError("Invalid torrent: piece length must be positive")

    meta.info_hash = hashlib.sha1(info_bytes).digest()
    logger.debug("Parsed torrent %r, info hash %s", meta.info.name, meta.info_hash.hex())
    return meta


def load_metainfo(path) -> Metainfo:
    return parse_metainfo(Path(path).read_bytes())

"""
Tracker announce responses filled by the projector.
"""
from dataclasses import dataclass, field
from typing import Annotated, Any, List, Optional, Tuple

from .projector import project
from .shapes import UINT16, Seq, record_of
from .structure import BencodeList, BencodeString
from .unmarshal import load_async, unmarshal

__all__ = ["TrackerFailure", "Peer", "TrackerResponse", "compact_to_peers",
           "parse_tracker_response", "read_tracker_response"]


class TrackerFailure(RuntimeError):
    """The tracker answered with a `failure reason`."""


@dataclass
class Peer:
    ip: str = ""
    port: Annotated[int, UINT16] = 0
    peer_id: Optional[bytes] = field(default=None, metadata={"bencode": "peer id"})


@dataclass
class TrackerResponse:
    failure_reason: Optional[str] = field(default=None, metadata={"bencode": "failure reason"})
    warning_message: Optional[str] = field(default=None, metadata={"bencode": "warning message"})
    interval: int = 0
    min_interval: Optional[int] = field(default=None, metadata={"bencode": "min interval"})
    tracker_id: Optional[bytes] = field(default=None, metadata={"bencode": "tracker id"})
    complete: int = 0
    incomplete: int = 0
    # compact byte string or list of peer dictionaries
    peers: Any = None

    def peer_list(self) -> List[Tuple[str, int]]:
        if self.peers is None:
            return []
        if isinstance(self.peers, BencodeString):
            return compact_to_peers(self.peers.value)
        if isinstance(self.peers, BencodeList):
            peers = project(self.peers, Seq(record_of(Peer)), path="peers")
            return [(p.ip, p.port) for p in peers]
        raise ValueError("Tracker returned invalid peer list")


def compact_to_peers(blob: bytes) -> List[Tuple[str, int]]:
    """
    Decodes a compact peer list (6 bytes per peer: 4 for IP, 2 for port)
    into a list of (IP, port) tuples.
    """
    if len(blob) % 6:
        raise ValueError("Compact peer list length is not a multiple of 6")
    peers = []
    for i in range(0, len(blob), 6):
        ip = ".".join(str(b) for b in blob[i:i+4])
        port = int.from_bytes(blob[i+4:i+6], "big")
        peers.append((ip, port))
    return peers


def _check(resp: TrackerResponse) -> TrackerResponse:
    if resp.failure_reason is not None:
        raise TrackerFailure("Tracker error: " + resp.failure_reason)
    return resp


def parse_tracker_response(data: bytes) -> TrackerResponse:
    return _check(unmarshal(data, TrackerResponse()))


async def read_tracker_response(source) -> TrackerResponse:
    """Reads an announce response from an aiohttp response or asyncio stream."""
    return _check(await load_async(source, TrackerResponse()))

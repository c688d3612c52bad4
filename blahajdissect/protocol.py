"""Shared packet representation, errors and formatting helpers for dissectors."""

from __future__ import annotations

import enum
import socket
from dataclasses import dataclass

NAME = "openBLÅHAJ"
TITLE = "openBLÅHAJ - Network packet analysis tool"
VERSION = "1.0.0"

LABEL_WIDTH = 45


class Verbosity(enum.IntEnum):
    """How much detail a dissector writes."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3


class DissectError(ValueError):
    """Base class for errors raised while decoding a packet."""


class BufferOverflowError(DissectError):
    """A read went past the end of the packet data."""


class InvalidValuesError(DissectError):
    """The packet holds values that make no sense for its protocol."""


@dataclass
class Packet:
    """Bytes of one protocol layer together with the verbosity to dump them at."""

    data: bytes
    verbosity: Verbosity = Verbosity.HIGH

    def __post_init__(self) -> None:
        self.data = bytes(self.data)
        self.verbosity = Verbosity(self.verbosity)

    def __len__(self) -> int:
        return len(self.data)

    def take(self, offset: int, length: int) -> bytes:
        """Return ``length`` bytes starting at ``offset``, or raise if they are not all there."""
        if offset < 0 or length < 0 or offset + length > len(self.data):
            raise BufferOverflowError(
                f"cannot read {length} bytes at offset {offset} of a {len(self.data)}-byte buffer"
            )
        return self.data[offset:offset + length]

    def byte(self, offset: int) -> int:
        """Return the byte at ``offset``."""
        return self.take(offset, 1)[0]

    def u16(self, offset: int) -> int:
        """Return the big-endian 16-bit integer at ``offset``."""
        return int.from_bytes(self.take(offset, 2), "big")

    def u32(self, offset: int) -> int:
        """Return the big-endian 32-bit integer at ``offset``."""
        return int.from_bytes(self.take(offset, 4), "big")

    def u64(self, offset: int) -> int:
        """Return the big-endian 64-bit integer at ``offset``."""
        return int.from_bytes(self.take(offset, 8), "big")


def field(label: str, value: object) -> str:
    """Format one ``label = value`` line of a detailed dump, without the newline."""
    return f"{label:<{LABEL_WIDTH}} = {value}"


def format_ipv4(raw: bytes) -> str:
    """Format four bytes as a dotted IPv4 address."""
    if len(raw) != 4:
        raise ValueError(f"an IPv4 address is 4 bytes, got {len(raw)}")
    return socket.inet_ntop(socket.AF_INET, bytes(raw))


def format_ipv6(raw: bytes) -> str:
    """Format sixteen bytes as a textual IPv6 address."""
    if len(raw) != 16:
        raise ValueError(f"an IPv6 address is 16 bytes, got {len(raw)}")
    return socket.inet_ntop(socket.AF_INET6, bytes(raw))
"""RIPng dissector."""

from __future__ import annotations

from dataclasses import dataclass

from blahajdissect.protocol import (
    BufferOverflowError,
    Packet,
    Verbosity,
    field,
    format_ipv6,
)

HEADER_LENGTH = 4
ENTRY_LENGTH = 20
NEXT_HOP_METRIC = 0xFF

_COMMANDS = {
    1: "Request",
    2: "Response",
}


def command_name(command: int) -> str:
    """Return the name of a RIPng command."""
    return _COMMANDS.get(command, "Unknown")


@dataclass(frozen=True)
class _Entry:
    prefix: str
    route_tag: int
    prefix_length: int
    metric: int

    @classmethod
    def parse(cls, raw: bytes) -> _Entry:
        return cls(
            prefix=format_ipv6(raw[0:16]),
            route_tag=int.from_bytes(raw[16:18], "big"),
            prefix_length=raw[18],
            metric=raw[19],
        )

    @property
    def is_next_hop(self) -> bool:
        return self.metric == NEXT_HOP_METRIC


def _entries(packet: Packet) -> list[_Entry]:
    count = (len(packet) - HEADER_LENGTH) // ENTRY_LENGTH
    return [
        _Entry.parse(packet.take(HEADER_LENGTH + index * ENTRY_LENGTH, ENTRY_LENGTH))
        for index in range(count)
    ]


def _detail(command: int, version: int, entries: list[_Entry]) -> str:
    lines = [
        "--- BEGIN RIPng MESSAGE ---",
        field("Command", f"{command} ({command_name(command)})"),
        field("Version", version),
    ]
    for entry in entries:
        lines.append("--- BEGIN RIPng ENTRY ---")
        if entry.is_next_hop:
            lines.append(field("IPv6 Next Hop address", entry.prefix))
        else:
            lines.append(field("IPv6 Prefix", f"{entry.prefix}/{entry.prefix_length}"))
            lines.append(field("Route Tag", entry.route_tag))
            lines.append(field("Prefix Length", entry.prefix_length))
            lines.append(field("Metric", entry.metric))
    return "\n".join(lines) + "\n"


def _summary_entry(entry: _Entry) -> str:
    if entry.is_next_hop:
        return f"Next hop : {entry.prefix}, "
    return f"IPv6 Prefix : {entry.prefix}/{entry.prefix_length}, Metric : {entry.metric}, "


def _summary(command: int, entries: list[_Entry]) -> str:
    items = "; ".join(_summary_entry(entry) for entry in entries)
    return f"RIPng => Command : {command_name(command)}, [{items}]"


def dump(packet: Packet) -> str:
    """Return the dump of a RIPng message."""
    if len(packet) < HEADER_LENGTH:
        raise BufferOverflowError(f"a RIPng header needs {HEADER_LENGTH} bytes, got {len(packet)}")
    command = packet.byte(0)
    version = packet.byte(1)
    if packet.verbosity == Verbosity.LOW:
        return "> RIPng "
    entries = _entries(packet)
    if packet.verbosity == Verbosity.MEDIUM:
        return _summary(command, entries)
    return _detail(command, version, entries)
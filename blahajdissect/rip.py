"""RIP (versions 1 and 2) dissector."""

from __future__ import annotations

from dataclasses import dataclass

from blahajdissect.protocol import (
    BufferOverflowError,
    Packet,
    Verbosity,
    field,
    format_ipv4,
)

HEADER_LENGTH = 4
ENTRY_LENGTH = 20

_COMMANDS = {
    1: "Request",
    2: "Response",
    3: "Traceon",
    4: "Traceoff",
    5: "Reserved",
}


def command_name(command: int) -> str:
    """Return the name of a RIP command."""
    return _COMMANDS.get(command, "Unknown")


@dataclass(frozen=True)
class _Entry:
    family: int
    route_tag: int
    address: str
    mask: str
    next_hop: int
    metric: int

    @classmethod
    def parse(cls, raw: bytes) -> _Entry:
        return cls(
            family=int.from_bytes(raw[0:2], "big"),
            route_tag=int.from_bytes(raw[2:4], "big"),
            address=format_ipv4(raw[4:8]),
            mask=format_ipv4(raw[8:12]),
            next_hop=int.from_bytes(raw[12:16], "big"),
            metric=int.from_bytes(raw[16:20], "big"),
        )


def _entries(packet: Packet) -> list[_Entry]:
    count = (len(packet) - HEADER_LENGTH) // ENTRY_LENGTH
    return [
        _Entry.parse(packet.take(HEADER_LENGTH + index * ENTRY_LENGTH, ENTRY_LENGTH))
        for index in range(count)
    ]


def _detail(command: int, version: int, entries: list[_Entry]) -> str:
    lines = [
        "--- BEGIN RIP MESSAGE ---",
        field("Command", f"{command} ({command_name(command)})"),
        field("Version", version),
    ]
    for entry in entries:
        lines.append("--- BEGIN RIP ENTRY ---")
        lines.append(field("Address Family Identifier", entry.family))
        if version > 1:
            lines.append(field("Route tag", entry.route_tag))
        lines.append(field("IP Address", entry.address))
        if version > 1:
            lines.append(field("Subnet Mask", entry.mask))
            lines.append(field("Next Hop", entry.next_hop))
        lines.append(field("Metric", entry.metric))
    return "\n".join(lines) + "\n"


def _summary(command: int, entries: list[_Entry]) -> str:
    items = "; ".join(
        f"Address Family Identifier : {entry.family}, "
        f"IP Address : {entry.address}, "
        f"Metric : {entry.metric}"
        for entry in entries
    )
    return f"RIP => Command : {command_name(command)}, [{items}]\n"


def dump(packet: Packet) -> str:
    """Return the dump of a RIP message."""
    if len(packet) < HEADER_LENGTH:
        raise BufferOverflowError(f"a RIP header needs {HEADER_LENGTH} bytes, got {len(packet)}")
    command = packet.byte(0)
    version = packet.byte(1)
    if packet.verbosity == Verbosity.LOW:
        return "> RIP "
    entries = _entries(packet)
    if packet.verbosity == Verbosity.MEDIUM:
        return _summary(command, entries)
    return _detail(command, version, entries)
"""WireGuard dissector for handshake and transport data messages."""

from __future__ import annotations

from blahajdissect.protocol import Packet, Verbosity, field

HEADER_LENGTH = 4
FIRST_MESSAGE_LENGTH = 148
SECOND_MESSAGE_LENGTH = 92
DATA_MESSAGE_LENGTH = 16

_MESSAGE_NAMES = {
    1: "First message",
    2: "Second message",
    4: "Data message",
}


def _le(raw: bytes) -> int:
    return int.from_bytes(raw, "little")


def _hex(raw: bytes) -> str:
    return "".join(f"{byte:x}" for byte in raw)


def _decimal(raw: bytes) -> str:
    return "".join(str(byte) for byte in raw)


def _first_message(packet: Packet) -> list[str]:
    data = packet.take(0, FIRST_MESSAGE_LENGTH)
    return [
        field("Message type", "1 (First message)"),
        field("Sender index", f"0x{_le(data[4:8]):x}"),
        field("Unencrypted ephemeral", "0x" + _hex(data[8:40])),
        field("Encrypted static", "0x" + _hex(data[40:88])),
        field("Encrypted timestamp", "0x" + _hex(data[88:116])),
        field("MAC 1", _hex(data[116:132])),
        field("MAC 2", _hex(data[132:148])),
    ]


def _second_message(packet: Packet) -> list[str]:
    data = packet.take(0, SECOND_MESSAGE_LENGTH)
    return [
        field("Message type", "2 (Second message)"),
        field("Sender index", f"0x{_le(data[4:8]):x}"),
        field("Receiver index", f"0x{_le(data[8:12]):x}"),
        field("Unencrypted ephemeral", "0x" + _decimal(data[12:44])),
        field("Encrypted nothing", "0x" + _decimal(data[44:60])),
        field("MAC 1", _hex(data[60:76])),
        field("MAC 2", _hex(data[76:92])),
    ]


def _data_message(packet: Packet) -> list[str]:
    data = packet.take(0, DATA_MESSAGE_LENGTH)
    raw = "".join(f"{byte:02x} " for byte in packet.data[DATA_MESSAGE_LENGTH:])
    return [
        field("Message type", "4 (Data message)"),
        field("Receiver index", f"0x{_le(data[4:8]):x}"),
        field("Counter", _le(data[8:16])),
        field("Raw data", raw),
    ]


_DETAIL = {
    1: _first_message,
    2: _second_message,
    4: _data_message,
}


def dump(packet: Packet) -> str:
    """Return the dump of a WireGuard message."""
    message_type = packet.take(0, HEADER_LENGTH)[0]

    if packet.verbosity == Verbosity.LOW:
        return "> WireGuard "
    if packet.verbosity == Verbosity.MEDIUM:
        return f"Wireguard => {_MESSAGE_NAMES.get(message_type, '')}\n"
    lines = ["--- BEGIN WIREGUARD BUFFER ---"]
    detail = _DETAIL.get(message_type)
    if detail is not None:
        lines.extend(detail(packet))
    return "\n".join(lines) + "\n"
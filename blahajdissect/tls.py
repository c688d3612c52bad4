"""TLS record-layer dissector."""

from __future__ import annotations

from blahajdissect.protocol import Packet, Verbosity, field

HEADER_LENGTH = 5

_CONTENT_TYPES = {
    0x14: "Change Cipher Spec",
    0x15: "Alert",
    0x16: "Handshake",
    0x17: "Application Data",
    0x18: "Heartbeat",
    0x19: "TLS 1.2 Cid",
    0x20: "ACK",
    0x21: "Return routability check",
}

_VERSIONS = {
    0x304: "TLS 1.3",
    0x303: "TLS 1.2",
    0x302: "TLS 1.1",
    0x301: "TLS 1.0",
    0x300: "SSL 3.0",
}


def content_type_name(content_type: int) -> str:
    """Return the name of a TLS record content type."""
    return _CONTENT_TYPES.get(content_type, "Unknown")


def version_name(version: int) -> str:
    """Return the name of a TLS protocol version."""
    return _VERSIONS.get(version, "Unknown")


def dump(packet: Packet) -> str:
    """Return the dump of a TLS record."""
    packet.take(0, HEADER_LENGTH)
    content_type = packet.byte(0)
    version = packet.u16(1)
    length = packet.u16(3)

    if packet.verbosity == Verbosity.LOW:
        return "> TLS "
    if packet.verbosity == Verbosity.MEDIUM:
        return (
            f"TLS => Content Type : {content_type_name(content_type)}, "
            f"Version : {version_name(version)}\n"
        )
    raw = "".join(f"{byte:x} " for byte in packet.data[HEADER_LENGTH:])
    lines = [
        "--- BEGIN TLS BUFFER ---",
        field("Content Type", f"0x{content_type:x} ({content_type_name(content_type)})"),
        field("Version", f"0x{version:x} ({version_name(version)})"),
        field("Length", f"0x{length:x}"),
        field("Raw data", raw),
    ]
    return "\n".join(lines) + "\n"
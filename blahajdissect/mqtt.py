"""MQTT dissector; one TCP segment may carry several control packets."""

from __future__ import annotations

from blahajdissect.protocol import (
    BufferOverflowError,
    InvalidValuesError,
    Packet,
    Verbosity,
    field,
)

HEADER_LENGTH = 2
PUBLISH = 3
_MAX_MULTIPLIER = 128 * 128 * 128

_PACKET_TYPES = (
    "Reserved",
    "Connect",
    "Connack",
    "Publish",
    "Puback",
    "Pubrec",
    "Pubrel",
    "Pubcomp",
    "Subscribe",
    "Suback",
    "Unsubscribe",
    "Unsuback",
    "Pingreq",
    "Pingresp",
    "Disconnect",
    "Auth",
)


def packet_type_name(packet_type: int) -> str:
    """Return the name of an MQTT control packet type."""
    if 0 <= packet_type < len(_PACKET_TYPES):
        return _PACKET_TYPES[packet_type]
    return "Unknown"


def decode_varint(packet: Packet, offset: int) -> tuple[int, int]:
    """Decode the variable byte integer at ``offset``; return its value and byte count."""
    value = 0
    multiplier = 1
    length = 0
    while True:
        encoded = packet.byte(offset + length)
        value += (encoded & 0x7F) * multiplier
        if multiplier > _MAX_MULTIPLIER:
            raise InvalidValuesError("MQTT variable byte integer is longer than 4 bytes")
        multiplier *= 128
        length += 1
        if not encoded & 0x80:
            return value, length


def _publish(packet: Packet, offset: int, length: int) -> list[str]:
    property_length, property_bytes = decode_varint(packet, offset)
    offset += property_bytes + property_length

    topic_length, topic_bytes = decode_varint(packet, offset)
    topic_start = offset + topic_bytes
    topic = "".join(chr(byte) for byte in packet.take(topic_start, topic_length))
    identifier_offset = topic_start + topic_length

    payload_count = length - topic_length - topic_bytes - property_length - property_bytes - 2
    payload = ""
    if payload_count > 0:
        payload = f"{packet.byte(identifier_offset + 2):02x}" * payload_count

    return [
        field("Topic length", topic_length),
        field("Topic", topic),
        field("Packet identifier", packet.u16(identifier_offset)),
        field("Payload", payload),
    ]


def _detail(packet: Packet, packet_type: int, flags: int) -> str:
    length, length_bytes = decode_varint(packet, 1)
    lines = [
        "--- BEGIN MQTT MESSAGE ---",
        field("Packet type", f"{packet_type} ({packet_type_name(packet_type)})"),
        field("Flags", flags),
        field("Length", length),
    ]
    if packet_type == PUBLISH:
        lines.extend(_publish(packet, length_bytes + 1, length))
    return "\n".join(lines) + "\n"


def _summary(packet: Packet, packet_type: int, flags: int) -> str:
    length, _ = decode_varint(packet, 1)
    return (
        f"MQTT => Packet type : {packet_type_name(packet_type)}, "
        f"Flags : {flags}, Length : {length}\n"
    )


def _dump_one(packet: Packet) -> tuple[str, int]:
    if len(packet) < HEADER_LENGTH:
        raise BufferOverflowError(f"an MQTT header needs {HEADER_LENGTH} bytes, got {len(packet)}")
    first = packet.byte(0)
    packet_type, flags = first >> 4, first & 0xF
    remaining, _ = decode_varint(packet, 1)

    if packet.verbosity == Verbosity.LOW:
        text = "> MQTT "
    elif packet.verbosity == Verbosity.MEDIUM:
        text = _summary(packet, packet_type, flags)
    else:
        text = _detail(packet, packet_type, flags)
    return text, remaining + 2


def dump(packet: Packet) -> str:
    """Return the dump of every MQTT packet in the segment."""
    parts = []
    position = 0
    while position < len(packet):
        text, advance = _dump_one(Packet(packet.data[position:], packet.verbosity))
        parts.append(text)
        position += advance
    return "".join(parts)
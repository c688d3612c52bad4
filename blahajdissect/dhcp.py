"""DHCP dissector: walks the option list that follows the BOOTP vendor cookie."""

from __future__ import annotations

import uuid

from blahajdissect.dhcp_values import (
    cablelabs_suboption_name,
    command_name,
    format_classless_routes,
    format_client_fqdn,
    format_client_id,
    format_geo,
    format_ipv4s,
    format_relay_agent_information,
    format_vendor,
    message_type_name,
)
from blahajdissect.protocol import (
    BufferOverflowError,
    InvalidValuesError,
    Packet,
    Verbosity,
    field,
    format_ipv6,
)

PAD = 0x00
END = 0xFF
ISNS_LENGTH = 10

_IPV4_LIST = frozenset({
    0x1, 0x3, 0x4, 0x5, 0x6, 0x7, 0x8, 0x9, 0xA, 0xB, 0x10, 0x1C, 0x20, 0x29,
    0x2A, 0x2C, 0x2D, 0x30, 0x31, 0x32, 0x36, 0x41, 0x44, 0x45, 0x46, 0x47,
    0x48, 0x49, 0x4A, 0x4B, 0x4C, 0x55, 0x59, 0x5C, 0x76,
})

_STRINGS = frozenset({
    0xC, 0xE, 0xF, 0x11, 0x12, 0x28, 0x38, 0x3E, 0x40, 0x42, 0x43, 0x62, 0x64,
    0x65, 0x72,
})

_U32 = frozenset({0x2, 0xD, 0x18, 0x23, 0x26, 0x33, 0x3A, 0x3B, 0x5B, 0x6C})

_U8 = frozenset({
    0x13, 0x14, 0x17, 0x1B, 0x1D, 0x1E, 0x1F, 0x22, 0x24, 0x25, 0x27, 0x34,
    0x50, 0x74,
})

_U16 = frozenset({0x16, 0x1A, 0x39})

_UNIMPLEMENTED = frozenset({
    0x15, 0x19, 0x21, 0x2E, 0x2F, 0x3C, 0x3F, 0x4D, 0x4F, 0x56, 0x57, 0x58,
    0x63, 0x77,
})

_ARCHITECTURES = {
    0: "Intel x86PC",
    1: "NEC/PC98",
    2: "EFI Itanium",
    3: "DEC Alpha",
    4: "Arc x86",
    5: "Intel Lean Client",
    6: "EFI IA32",
    7: "EFI BC",
    8: "EFI Xscale",
    9: "EFI x86-64",
}


def _text(packet: Packet, offset: int, length: int) -> str:
    return "".join(chr(byte) for byte in packet.data[offset:offset + length])


def _parameter_list(packet: Packet, offset: int, length: int) -> str:
    return ", ".join(f"0x{packet.byte(offset + index):x}" for index in range(length))


def _isns(packet: Packet, offset: int, length: int) -> str:
    raw = packet.take(offset, ISNS_LENGTH)
    functions = int.from_bytes(raw[0:2], "big")
    dd_access = int.from_bytes(raw[2:4], "big")
    admin_flags = int.from_bytes(raw[4:6], "big")
    sec_bitmap = int.from_bytes(raw[6:10], "big")
    servers_offset = offset + ISNS_LENGTH
    servers = format_ipv4s(packet, servers_offset, (length - servers_offset) & 0xFF)
    return (
        f"iSNS functions -> {functions}; "
        f"DD Access -> {dd_access}; "
        f"Administrative flags -> {admin_flags}; "
        f"Security bitmap -> {sec_bitmap}; "
        f"Servers -> {servers}"
    )


def _auth(packet: Packet, offset: int, length: int) -> str:
    packet.take(offset, 3 + 8)
    information = "".join(f"{packet.byte(offset + index):x} " for index in range(7, length))
    return (
        f"Protocol -> {packet.byte(offset)}; "
        f"Algorithm -> {packet.byte(offset + 1)}; "
        f"RDM -> {packet.byte(offset + 2)}; "
        f"Replay detection -> {packet.u64(offset + 3)}; "
        f"Authentication information -> {information}"
    )


def _architecture(packet: Packet, offset: int) -> str:
    return _ARCHITECTURES.get(packet.u16(offset), "Unknown") + "\n"


def _network_interface(packet: Packet, offset: int) -> str:
    if offset + 2 >= len(packet):
        raise BufferOverflowError(f"client network interface identifier at offset {offset} is truncated")
    return (
        f"Type -> {packet.byte(offset)}, "
        f"Revision -> {packet.byte(offset + 1)}.{packet.byte(offset + 2)}"
    )


def _machine_identifier(packet: Packet, offset: int) -> str:
    if offset + 16 >= len(packet):
        raise BufferOverflowError(f"client machine identifier at offset {offset} is truncated")
    guid = uuid.UUID(bytes=packet.take(offset + 1, 16))
    return f"Type -> {packet.byte(offset)}; GUID -> {guid}"


def _name_service_search(packet: Packet, offset: int, length: int) -> str:
    parts = []
    for position in range(0, length, 2):
        code = packet.u16(offset + position)
        parts.append(f"{code:x}")
        if code <= 0xFF:
            parts.append(f" ({command_name(code)})")
        if position < length - 1:
            parts.append(", ")
    return "".join(parts)


def _sip_servers(packet: Packet, offset: int, length: int) -> str:
    if packet.byte(offset) == 1:
        return format_ipv4s(packet, offset + 1, (length - 1) & 0xFF)
    return "Unimplemented"


def _cablelabs(packet: Packet, offset: int, length: int) -> str:
    parts = []
    position = 0
    while position < length:
        if offset + position + 1 >= len(packet):
            raise BufferOverflowError(f"CableLabs sub-option at offset {offset + position} is truncated")
        name = cablelabs_suboption_name(packet.byte(offset + position))
        sublength = packet.byte(offset + position + 1)
        parts.append(f"{name} -> ")
        start = offset + position + 2
        if start + sublength > len(packet):
            raise InvalidValuesError(f"CableLabs sub-option at offset {offset + position} is too long")
        parts.append("".join(f"{byte:x} " for byte in packet.data[start:start + sublength]))
        parts.append("; ")
        position += sublength + 2
    return "".join(parts)


def _value(packet: Packet, offset: int, code: int, length: int) -> str:
    if code in _IPV4_LIST:
        return format_ipv4s(packet, offset, length)
    if code in _STRINGS:
        return _text(packet, offset, length)
    if code in _U32:
        return str(packet.u32(offset))
    if code in _U8:
        return str(packet.byte(offset))
    if code in _U16:
        return str(packet.u16(offset))
    if code in _UNIMPLEMENTED:
        return "Unimplemented"
    if code == 0x35:
        return message_type_name(packet.byte(offset))
    if code == 0x37:
        return _parameter_list(packet, offset, length)
    if code == 0x4E:
        no_multicast = packet.byte(offset)
        servers = format_ipv4s(packet, offset + 1, (length - 1) & 0xFF)
        return f"{servers}\n{field('No multicast discovery', no_multicast)}"
    if code == 0x3D:
        return format_client_id(packet, offset)
    if code == 0x51:
        return format_client_fqdn(packet, offset, length)
    if code == 0x52:
        return format_relay_agent_information(packet, offset, length)
    if code == 0x53:
        return _isns(packet, offset, length)
    if code == 0x5A:
        return _auth(packet, offset, length)
    if code == 0x5D:
        return _architecture(packet, offset)
    if code == 0x5E:
        return _network_interface(packet, offset)
    if code == 0x61:
        return _machine_identifier(packet, offset)
    if code == 0x6D:
        return format_ipv6(packet.take(offset, 16))
    if code == 0x75:
        return _name_service_search(packet, offset, length)
    if code == 0x78:
        return _sip_servers(packet, offset, length)
    if code == 0x79:
        return format_classless_routes(packet, offset, length)
    if code == 0x7A:
        return _cablelabs(packet, offset, length)
    if code in (0x7B, 0x90):
        return format_geo(packet, offset, False)
    if code in (0x7C, 0x7D):
        return format_vendor(packet, offset, length)
    return "".join(f"{byte:x}" for byte in packet.data[offset:offset + length])


def format_option(packet: Packet, offset: int, code: int, length: int) -> str:
    """Format the option ``code`` whose ``length`` value bytes start at ``offset``."""
    if offset + length > len(packet):
        raise BufferOverflowError(f"DHCP option {code} of {length} bytes at offset {offset} runs past the buffer")
    return field(command_name(code), _value(packet, offset, code, length))


def dump(packet: Packet) -> str:
    """Return the dump of a DHCP option list."""
    if packet.verbosity == Verbosity.LOW:
        return "> DHCP "
    detailed = packet.verbosity == Verbosity.HIGH
    parts = ["--- BEGIN DHCP MESSAGE ---\n" if detailed else "DHCP => Options : "]
    position = 0
    while position < len(packet):
        code = packet.byte(position)
        if not detailed:
            parts.append(str(code))
        if code == END:
            break
        if not detailed:
            parts.append(", ")
        if code == PAD:
            position += 1
            continue
        if position + 1 >= len(packet):
            raise BufferOverflowError(f"DHCP option at offset {position} has no length byte")
        length = packet.byte(position + 1)
        if detailed:
            parts.append(format_option(packet, position + 2, code, length) + "\n")
        position += length + 2
    parts.append("\n")
    return "".join(parts)
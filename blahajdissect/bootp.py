"""BOOTP dissector; hands DHCP options on to the DHCP dissector."""

from __future__ import annotations

from dataclasses import dataclass

from blahajdissect import dhcp
from blahajdissect.protocol import (
    BufferOverflowError,
    Packet,
    Verbosity,
    field,
    format_ipv4,
)

HEADER_LENGTH = 241
VENDOR_OFFSET = 236
DHCP_OFFSET = 240
BOOTP_VENDOR_MAGIC = 0x63825363
DHCP_MESSAGE_TYPE_OPTION = 0x35
ETHERNET = 1


@dataclass(frozen=True)
class BootpHeader:
    """Fixed part of a BOOTP message, up to the first vendor option byte."""

    op: int
    htype: int
    hlen: int
    hops: int
    xid: int
    secs: int
    flags: int
    ciaddr: bytes
    yiaddr: bytes
    siaddr: bytes
    giaddr: bytes
    chaddr: bytes
    sname: bytes
    file: bytes
    vend: bytes

    @classmethod
    def from_bytes(cls, data: bytes) -> BootpHeader:
        """Decode the header from the start of ``data``."""
        data = bytes(data)
        if len(data) < HEADER_LENGTH:
            raise BufferOverflowError(f"a BOOTP header needs {HEADER_LENGTH} bytes, got {len(data)}")
        return cls(
            op=data[0],
            htype=data[1],
            hlen=data[2],
            hops=data[3],
            xid=int.from_bytes(data[4:8], "big"),
            secs=int.from_bytes(data[8:10], "big"),
            flags=int.from_bytes(data[10:12], "big"),
            ciaddr=data[12:16],
            yiaddr=data[16:20],
            siaddr=data[20:24],
            giaddr=data[24:28],
            chaddr=data[28:44],
            sname=data[44:108],
            file=data[108:236],
            vend=data[VENDOR_OFFSET:HEADER_LENGTH],
        )

    @property
    def carries_dhcp(self) -> bool:
        """Whether the vendor area starts with the magic cookie and a message type option."""
        cookie = int.from_bytes(self.vend[0:4], "big")
        return cookie == BOOTP_VENDOR_MAGIC and self.vend[4] == DHCP_MESSAGE_TYPE_OPTION


def _hardware_address(header: BootpHeader) -> str:
    if header.htype == ETHERNET:
        return ":".join(f"{byte:x}" for byte in header.chaddr[:6])
    return " ".join(
        f"{int.from_bytes(header.chaddr[index:index + 2], 'big'):04x}"
        for index in range(0, 16, 2)
    )


def _chars(raw: bytes) -> str:
    return "".join(chr(byte) for byte in raw)


def _detail(header: BootpHeader) -> str:
    lines = [
        "--- BEGIN BOOTP MESSAGE ---",
        field("OP", header.op),
        field("Hardware address type", header.htype),
        field("Hardware address length", header.hlen),
        field("Hops", header.hops),
        field("Transaction ID", header.xid),
        field("Seconds elapsed", header.secs),
        field("Flags", header.flags),
        field("Client IP address", format_ipv4(header.ciaddr)),
        field("Your IP address", format_ipv4(header.yiaddr)),
        field("Server IP address", format_ipv4(header.siaddr)),
        field("Gateway IP address", format_ipv4(header.giaddr)),
        field("Client hardware address", _hardware_address(header)),
        field("Server host name", _chars(header.sname)),
        field("Boot file name", _chars(header.file)),
    ]
    return "\n".join(lines) + "\n"


def _summary(header: BootpHeader) -> str:
    parts = ["BOOTP => "]
    for label, raw in (
        ("Client IP address", header.ciaddr),
        ("Your IP address", header.yiaddr),
        ("Server IP address", header.siaddr),
        ("Gateway IP address", header.giaddr),
    ):
        if any(raw):
            parts.append(f"{label} : {format_ipv4(raw)}, ")
    parts.append(f"Hardware address : {_hardware_address(header)}, ")
    if header.sname[0]:
        parts.append(f"Server host name : {_chars(header.sname)}, ")
    if header.file[0]:
        parts.append(f"Boot file name : {_chars(header.file)}")
    parts.append("\n")
    return "".join(parts)


def dump(packet: Packet) -> str:
    """Return the dump of a BOOTP message, followed by its DHCP options if any."""
    header = BootpHeader.from_bytes(packet.data)
    if packet.verbosity == Verbosity.LOW:
        text = "> Bootp "
    elif packet.verbosity == Verbosity.MEDIUM:
        text = _summary(header)
    else:
        text = _detail(header)
    if header.carries_dhcp:
        text += dhcp.dump(Packet(packet.data[DHCP_OFFSET:], packet.verbosity))
    return text
"""DNS and mDNS dissector: header, questions and resource records."""

from __future__ import annotations

from dataclasses import dataclass

from blahajdissect.protocol import (
    BufferOverflowError,
    InvalidValuesError,
    Packet,
    Verbosity,
    field,
    format_ipv4,
    format_ipv6,
)

HEADER_LENGTH = 12
MAX_NAME_LENGTH = 0xFF
OPT_TYPE = 0x29

_QTYPES = {
    1: "A",
    2: "NS",
    5: "CNAME",
    6: "SOA",
    12: "PTR",
    13: "HINFO",
    15: "MX",
    16: "TXT",
    17: "RP",
    18: "AFSDB",
    24: "SIG",
    25: "KEY",
    28: "AAAA",
    29: "LOC",
    33: "SRV",
    35: "NAPTR",
    36: "KX",
    37: "CERT",
    39: "DNAME",
    41: "OPT",
    42: "APL",
    43: "DS",
    44: "SSHFP",
    45: "IPSECKEY",
    46: "RRSIG",
    47: "NSEC",
    48: "DNSKEY",
    49: "DHCID",
    50: "NSEC3",
    51: "NSEC3PARAM",
    52: "TLSA",
    53: "SMIMEA",
    55: "HIP",
    59: "CDS",
    60: "CDNSKEY",
    61: "OPENPGPKEY",
    62: "CSYNC",
    63: "ZONEMD",
    64: "SVCB",
    65: "HTTPS",
    108: "EUI48",
    109: "EUI64",
    249: "TKEY",
    250: "TSIG",
    256: "URI",
    257: "CAA",
    32768: "TA",
    32769: "DLV",
}

_QCLASSES = {
    0x1: "Internet (IN)",
    0x3: "Chaos (CH)",
    0x4: "Hesiod (HS)",
    0xFE: "None",
    0xFF: "Any",
}

_RCODES = {
    0: "NoError",
    1: "FormErr",
    2: "ServFail",
    3: "NXDomain",
    4: "NotImp",
    5: "Refused",
    6: "YXDomain",
    7: "YXRRSet",
    8: "NXRRSet",
    9: "NotAuth",
    10: "NotZone",
    11: "DSOTYPENI",
    16: "BADVERS | BADSIG",
    17: "BADKEY",
    18: "BADTIME",
    19: "BADMODE",
    20: "BADNAME",
    21: "BADALG",
    22: "BADTRUNC",
    23: "BADCOOKIE",
}


def qtype_name(qtype: int) -> str:
    """Return the mnemonic of a DNS record type."""
    return _QTYPES.get(qtype, "Unknown")


def qclass_name(qclass: int) -> str:
    """Return the name of a DNS class."""
    return _QCLASSES.get(qclass, "Unknown")


def rcode_name(rcode: int) -> str:
    """Return the name of a DNS response code."""
    return _RCODES.get(rcode, "Unknown")


@dataclass
class _NameState:
    record_length: int = 0
    disallow_pointer: bool = False
    compressed: bool = False


def _read_labels(packet: Packet, offset: int, separator: str, out: list[str], state: _NameState) -> int:
    if packet.byte(offset) == 0:
        return offset + 1
    first_run = True
    while (length := packet.byte(offset)) != 0:
        if not first_run:
            out.append(separator)
        if length & 0xC0 == 0xC0:
            if state.disallow_pointer:
                raise InvalidValuesError("DNS name pointer points to another pointer")
            state.disallow_pointer = True
            target = ((length & 0x3F) << 8) | packet.byte(offset + 1)
            _read_labels(packet, target, separator, out, state)
            state.compressed = True
            return offset + 2
        state.disallow_pointer = False
        state.record_length += length + 1
        if state.record_length > MAX_NAME_LENGTH:
            raise InvalidValuesError("DNS name is longer than 255 bytes")
        first_run = False
        out.append("".join(chr(byte) for byte in packet.take(offset + 1, length)))
        offset += length + 1
        if offset >= len(packet):
            raise BufferOverflowError(f"DNS name runs past the end of the buffer at offset {offset}")
    return offset


def read_name(packet: Packet, offset: int, separator: str = ".") -> tuple[str, int, bool]:
    """Decode the domain name at ``offset``.

    Return the labels joined by ``separator``, the offset the decoder stopped at
    (the terminating zero byte of an uncompressed name, just past the pointer of a
    compressed one, or just past a lone root byte) and whether a pointer was followed.
    """
    state = _NameState()
    parts: list[str] = []
    end = _read_labels(packet, offset, separator, parts, state)
    return "".join(parts), end, state.compressed


@dataclass(frozen=True)
class _Header:
    transaction_id: int
    qr: int
    opcode: int
    aa: int
    tc: int
    rd: int
    ra: int
    z: int
    rcode: int
    questions: int
    answers: int
    authority: int
    additional: int

    @classmethod
    def parse(cls, packet: Packet) -> _Header:
        raw = packet.take(0, HEADER_LENGTH)
        flags, codes = raw[2], raw[3]
        return cls(
            transaction_id=int.from_bytes(raw[0:2], "big"),
            qr=flags >> 7,
            opcode=(flags >> 3) & 0xF,
            aa=(flags >> 2) & 1,
            tc=(flags >> 1) & 1,
            rd=flags & 1,
            ra=codes >> 7,
            z=(codes >> 4) & 0x7,
            rcode=codes & 0xF,
            questions=int.from_bytes(raw[4:6], "big"),
            answers=int.from_bytes(raw[6:8], "big"),
            authority=int.from_bytes(raw[8:10], "big"),
            additional=int.from_bytes(raw[10:12], "big"),
        )


def _ipv4_hint(packet: Packet, position: int, length: int) -> str:
    count = length // 4
    addresses = [format_ipv4(packet.take(position, 4)) for _ in range(count)]
    return "ipv4hint=" + ",".join(addresses)


def _ipv6_hint(packet: Packet, position: int, length: int) -> str:
    count = length // 16
    addresses = [format_ipv6(packet.take(position, 16)) for _ in range(count)]
    return "ipv6hint=" + ",".join(addresses)


def _https_param(packet: Packet, position: int, length: int, key: int) -> str:
    if key == 1:
        return f'alpn="{read_name(packet, position, ".")[0]}"'
    if key == 2:
        return f'no-default-alpn="{read_name(packet, position, ".")[0]}"'
    if key == 3:
        return f'port="{packet.u16(position)}"'
    if key == 4:
        return _ipv4_hint(packet, position, length)
    if key == 6:
        return _ipv6_hint(packet, position, length)
    return ""


def _https(packet: Packet, record_length: int, offset: int) -> str:
    priority = packet.u16(offset)
    parts = [f"0x{priority:x} "]
    relative = 2
    _, end, _ = read_name(packet, offset + relative, ",")
    target_end = end - offset
    if target_end - relative == 1:
        parts.append(".")
    relative = target_end
    parts.append(" ")
    while relative < record_length:
        key = packet.u16(offset + relative)
        relative += 2
        length = packet.u16(offset + relative)
        relative += 2
        parts.append(_https_param(packet, offset + relative, length, key))
        relative += length
        if relative < record_length:
            parts.append(" ")
    parts.append("\n")
    return "".join(parts)


def _soa(packet: Packet, offset: int) -> str:
    primary, end, _ = read_name(packet, offset, ".")
    relative = end - offset
    mailbox, end, _ = read_name(packet, offset + relative, ".")
    relative = end - offset
    parts = [f"{primary}. {mailbox}. "]
    for _ in range(5):
        parts.append(f"{packet.u32(offset + relative)} ")
        relative += 4
    return "".join(parts)


def _rdata(packet: Packet, rtype: int, record_length: int, offset: int) -> str:
    if rtype == 1:
        return format_ipv4(packet.take(offset, 4))
    if rtype == 5:
        return read_name(packet, offset, ".")[0]
    if rtype == 6:
        return _soa(packet, offset)
    if rtype == 28:
        return format_ipv6(packet.take(offset, 16))
    if rtype == 65:
        return _https(packet, record_length, offset)
    return ""


def _rr_line(section: str, label: str, pad: str, value: object) -> str:
    return f"{section}{label:<35}{pad} = {value}"


def _answer(packet: Packet, header: _Header, index: int, offset: int, out: list[str]) -> int:
    if index < header.answers:
        out.append("--- BEGIN DNS ANSWER RR ---\n")
        section, pad = "Response", "  "
    elif index < header.answers + header.authority:
        out.append("--- BEGIN DNS AUTHORITY RR ---\n")
        section, pad = "Authority", " "
    else:
        out.append("--- BEGIN DNS ADDITIONAL RR ---\n")
        section, pad = "Additional", ""

    name, end, compressed = read_name(packet, offset, ".")
    offset = end if compressed else end + 1
    out.append(_rr_line(section, " Domain Name", pad, f"{name}.") + "\n")

    rtype = packet.u16(offset)
    out.append(_rr_line(section, " Response Type", pad, f"0x{rtype:x} ({qtype_name(rtype)})") + "\n")
    offset += 2

    if rtype != OPT_TYPE:
        rclass = packet.u16(offset)
        out.append(_rr_line(section, " Response Class", pad, f"0x{rclass:x} ({qclass_name(rclass)})") + "\n")
        offset += 2
        ttl = packet.u32(offset)
        out.append(_rr_line(section, " Time To Live", pad, ttl) + "\n")
        offset += 4
        rdlength = packet.u16(offset)
        out.append(_rr_line(section, " RDATA Length", pad, rdlength) + "\n")
        offset += 2
        out.append(_rr_line(section, " RDATA", pad, _rdata(packet, rtype, rdlength, offset)) + "\n")
        return offset + rdlength

    payload_size = packet.u16(offset)
    out.append(_rr_line(section, " UDP Payload Size", pad, payload_size) + "\n")
    offset += 2
    extended_rcode = packet.byte(offset)
    out.append(_rr_line(section, " Extended RCode", pad, extended_rcode) + "\n")
    offset += 1
    version = packet.byte(offset)
    out.append(_rr_line(section, " Version", pad, version) + "\n")
    offset += 1
    flags = packet.byte(offset)
    out.append(_rr_line(section, " DNSSEC OK", pad, (flags >> 31) & 1) + "\n")
    out.append(_rr_line(section, " Z", pad, flags ^ (1 << 31)) + "\n")
    return offset + 2


def _opcode_name(opcode: int) -> str:
    if not opcode:
        return "Query"
    return "Status" if opcode == 2 else "IQuery"


def _detail(packet: Packet, header: _Header) -> str:
    out = [
        "--- BEGIN DNS MESSAGE ---\n",
        field("Transaction ID", header.transaction_id) + "\n",
        field("Query / Reply", f"{header.qr} ({'Reply' if header.qr else 'Query'})") + "\n",
        field("OPCODE", f"{header.opcode} ({_opcode_name(header.opcode)})") + "\n",
        field("Authoritative", header.aa) + "\n",
        field("Truncated", header.tc) + "\n",
        field("Recursion desired", header.rd) + "\n",
        field("Recursion available", header.ra) + "\n",
        field("Zero", header.z) + "\n",
        field("RCODE", f"{header.rcode} ({rcode_name(header.rcode)})") + "\n",
        field("Number of questions", header.questions) + "\n",
        field("Number of answers", header.answers) + "\n",
        field("Number of authority RRs", header.authority) + "\n",
        field("Number of additional RRs", header.additional) + "\n",
    ]
    response_count = (header.answers + header.authority + header.additional) & 0xFFFF

    offset = HEADER_LENGTH
    for _ in range(header.questions):
        out.append("--- BEGIN DNS QUERY ---\n")
        name, end, compressed = read_name(packet, offset, ".")
        out.append(field("Query Domain Name", name) + "\n")
        offset = end if compressed else end + 1
        qtype = packet.u16(offset)
        out.append(field("Query Type", f"0x{qtype:x} ({qtype_name(qtype)})") + "\n")
        offset += 2
        qclass = packet.u16(offset)
        out.append(field("Query Class", f"0x{qclass:x} ({qclass_name(qclass)})") + "\n")
        offset += 2

    for index in range(response_count):
        offset = _answer(packet, header, index, offset, out)
    return "".join(out)


def _summary(packet: Packet, header: _Header) -> str:
    out = [f"DNS => Query type : {'Reply' if header.qr else 'Query'}, ["]
    offset = HEADER_LENGTH
    for index in range(header.questions):
        name, end, _ = read_name(packet, offset, ".")
        out.append(f"Domain : {name}, ")
        offset = end + 1
        qtype = packet.u16(offset)
        out.append(f"Query type : {qtype_name(qtype)}")
        offset += 4
        if index != header.questions - 1:
            out.append("; ")
    out.append("]\n")
    return "".join(out)


def dump(packet: Packet) -> str:
    """Return the dump of a DNS message."""
    header = _Header.parse(packet)
    if packet.verbosity == Verbosity.LOW:
        return "> DNS "
    if packet.verbosity == Verbosity.MEDIUM:
        return _summary(packet, header)
    return _detail(packet, header)
import pytest

from blahajdissect import dns
from blahajdissect.protocol import (
    BufferOverflowError,
    InvalidValuesError,
    Packet,
    Verbosity,
    field,
)


def encode_name(name):
    return b"".join(bytes([len(label)]) + label.encode() for label in name.split(".")) + b"\x00"


def header(transaction_id=0x1234, flags=0x0100, qd=1, an=0, ns=0, ar=0):
    return (
        transaction_id.to_bytes(2, "big")
        + flags.to_bytes(2, "big")
        + qd.to_bytes(2, "big")
        + an.to_bytes(2, "big")
        + ns.to_bytes(2, "big")
        + ar.to_bytes(2, "big")
    )


def question(name, qtype=1, qclass=1):
    return encode_name(name) + qtype.to_bytes(2, "big") + qclass.to_bytes(2, "big")


def record(rtype, rdata, name_bytes=b"\xc0\x0c", rclass=1, ttl=300):
    return (
        name_bytes
        + rtype.to_bytes(2, "big")
        + rclass.to_bytes(2, "big")
        + ttl.to_bytes(4, "big")
        + len(rdata).to_bytes(2, "big")
        + rdata
    )


def test_lookup_names():
    assert dns.qtype_name(28) == "AAAA"
    assert dns.qtype_name(65) == "HTTPS"
    assert dns.qtype_name(999) == "Unknown"
    assert dns.qclass_name(1) == "Internet (IN)"
    assert dns.qclass_name(2) == "Unknown"
    assert dns.rcode_name(3) == "NXDomain"
    assert dns.rcode_name(16) == "BADVERS | BADSIG"
    assert dns.rcode_name(12) == "Unknown"


@pytest.mark.parametrize("name", ["example.com", "a.b.c.d", "localhost", "www.example.org"])
def test_read_name_round_trip(name):
    data = b"\xaa" + encode_name(name) + b"\x00\x01"
    text, end, compressed = dns.read_name(Packet(data), 1, ".")
    assert text == name
    assert data[end] == 0
    assert compressed is False


def test_read_name_custom_separator():
    data = encode_name("a.b") + b"\x00"
    assert dns.read_name(Packet(data), 0, ",")[0] == "a,b"


def test_read_name_root():
    assert dns.read_name(Packet(b"\x00\x01\x02"), 0, ".") == ("", 1, False)


def test_read_name_follows_pointer():
    data = encode_name("example.com") + b"\x03www\xc0\x00"
    start = len(encode_name("example.com"))
    text, end, compressed = dns.read_name(Packet(data), start, ".")
    assert text == "www.example.com"
    assert end == len(data)
    assert compressed is True


def test_read_name_pointer_to_pointer_is_invalid():
    data = b"\xc0\x02\xc0\x00"
    with pytest.raises(InvalidValuesError):
        dns.read_name(Packet(data), 0, ".")


def test_read_name_too_long_is_invalid():
    data = (b"\x3f" + b"a" * 63) * 5 + b"\x00"
    with pytest.raises(InvalidValuesError):
        dns.read_name(Packet(data), 0, ".")


def test_read_name_truncated():
    with pytest.raises(BufferOverflowError):
        dns.read_name(Packet(b"\x07exa"), 0, ".")


def test_short_header_raises():
    with pytest.raises(BufferOverflowError):
        dns.dump(Packet(b"\x00" * 5, Verbosity.LOW))


def test_low_verbosity():
    packet = Packet(header() + question("example.com"), Verbosity.LOW)
    assert dns.dump(packet) == "> DNS "


def test_medium_single_question():
    packet = Packet(header() + question("example.com"), Verbosity.MEDIUM)
    assert dns.dump(packet) == "DNS => Query type : Query, [Domain : example.com, Query type : A]\n"


def test_medium_two_questions_reply():
    data = header(flags=0x8180, qd=2) + question("a.com", 1) + question("b.com", 28)
    out = dns.dump(Packet(data, Verbosity.MEDIUM))
    assert out.startswith("DNS => Query type : Reply, [")
    assert "Domain : a.com, Query type : A; Domain : b.com, Query type : AAAA]" in out


def test_high_query_fields():
    out = dns.dump(Packet(header() + question("example.com"), Verbosity.HIGH))
    lines = out.splitlines()
    assert lines[0] == "--- BEGIN DNS MESSAGE ---"
    assert field("Transaction ID", 0x1234) in lines
    assert field("Query / Reply", "0 (Query)") in lines
    assert field("OPCODE", "0 (Query)") in lines
    assert field("Recursion desired", 1) in lines
    assert field("RCODE", "0 (NoError)") in lines
    assert field("Query Domain Name", "example.com") in lines
    assert field("Query Type", "0x1 (A)") in lines
    assert field("Query Class", "0x1 (Internet (IN))") in lines


def test_high_answer_a_record():
    data = (
        header(flags=0x8180, qd=1, an=1)
        + question("example.com")
        + record(1, bytes([192, 0, 2, 1]))
    )
    out = dns.dump(Packet(data))
    assert "--- BEGIN DNS ANSWER RR ---" in out
    assert "example.com." in out
    assert "0x1 (A)" in out
    assert out.rstrip("\n").endswith("= 192.0.2.1")
    assert field("Query / Reply", "1 (Reply)") in out


def test_high_answer_aaaa_record():
    rdata = bytes.fromhex("20010db8000000000000000000000001")
    data = header(flags=0x8180, qd=1, an=1) + question("example.com", 28) + record(28, rdata)
    out = dns.dump(Packet(data))
    assert "0x1c (AAAA)" in out
    assert "= 2001:db8::1" in out


def test_high_authority_section():
    data = (
        header(flags=0x8180, qd=1, ns=1)
        + question("example.com")
        + record(2, b"\xc0\x0c")
    )
    out = dns.dump(Packet(data))
    assert "--- BEGIN DNS AUTHORITY RR ---" in out
    assert "--- BEGIN DNS ANSWER RR ---" not in out
    assert "Authority Response Type" in out
    assert "0x2 (NS)" in out


def test_high_https_record():
    rdata = b"\x00\x01\x00" + b"\x00\x01\x00\x03\x02h2" + b"\x00\x03\x00\x02\x01\xbb"
    data = header(flags=0x8180, qd=1, an=1) + question("example.com", 65) + record(65, rdata)
    out = dns.dump(Packet(data))
    assert "0x41 (HTTPS)" in out
    assert '0x1 . alpn="h2" port="443"' in out


def test_high_answer_truncated_raises():
    data = header(flags=0x8180, qd=1, an=1) + question("example.com") + b"\xc0\x0c\x00"
    with pytest.raises(BufferOverflowError):
        dns.dump(Packet(data))
import ipaddress

import pytest

from blahajdissect.protocol import (
    BufferOverflowError,
    DissectError,
    InvalidValuesError,
    Packet,
    Verbosity,
    field,
    format_ipv4,
    format_ipv6,
)


def test_packet_converts_bytearray_to_bytes():
    packet = Packet(bytearray(b"\x01\x02"))
    assert packet.data == b"\x01\x02"
    assert isinstance(packet.data, bytes)
    assert len(packet) == 2


def test_packet_default_verbosity_is_high():
    assert Packet(b"").verbosity is Verbosity.HIGH


def test_packet_accepts_integer_verbosity():
    assert Packet(b"", 2).verbosity is Verbosity.MEDIUM


def test_integer_reads_are_big_endian():
    data = bytes(range(1, 9))
    packet = Packet(data)
    assert packet.byte(0) == 1
    assert packet.u16(0) == int.from_bytes(data[:2], "big")
    assert packet.u32(2) == int.from_bytes(data[2:6], "big")
    assert packet.u64(0) == int.from_bytes(data, "big")


def test_take_returns_slice():
    packet = Packet(b"abcdef")
    assert packet.take(2, 3) == b"cde"
    assert packet.take(6, 0) == b""


@pytest.mark.parametrize(
    "call",
    [
        lambda p: p.byte(4),
        lambda p: p.u16(3),
        lambda p: p.u32(1),
        lambda p: p.u64(0),
        lambda p: p.take(2, 3),
        lambda p: p.take(-1, 1),
    ],
)
def test_reads_past_end_raise(call):
    with pytest.raises(BufferOverflowError):
        call(Packet(b"\x00\x01\x02\x03"))


def test_errors_share_base_class():
    with pytest.raises(DissectError):
        Packet(b"").byte(0)
    assert issubclass(InvalidValuesError, DissectError)
    assert issubclass(DissectError, ValueError)


def test_field_pads_label_to_column():
    line = field("Length", 5)
    label, value = line.split(" = ")
    assert len(label) == 45
    assert label.rstrip() == "Length"
    assert value == "5"


def test_field_keeps_long_label_whole():
    label = "x" * 50
    assert field(label, "v") == label + " = v"


def test_format_ipv4():
    assert format_ipv4(b"\xc0\xa8\x01\x01") == "192.168.1.1"


def test_format_ipv6_compresses_zeros():
    raw = b"\x20\x01\x0d\xb8" + bytes(11) + b"\x01"
    assert format_ipv6(raw) == "2001:db8::1"


@pytest.mark.parametrize("raw", [bytes(16), bytes(range(16)), b"\xff" * 16])
def test_format_ipv6_round_trip(raw):
    assert ipaddress.IPv6Address(format_ipv6(raw)).packed == raw


@pytest.mark.parametrize("raw", [bytes(4), bytes([10, 0, 0, 1]), b"\xff" * 4])
def test_format_ipv4_round_trip(raw):
    assert ipaddress.IPv4Address(format_ipv4(raw)).packed == raw


def test_format_address_wrong_length():
    with pytest.raises(ValueError):
        format_ipv4(b"\x01\x02\x03")
    with pytest.raises(ValueError):
        format_ipv6(bytes(4))
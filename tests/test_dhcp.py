import pytest

from blahajdissect import dhcp
from blahajdissect.protocol import BufferOverflowError, Packet, Verbosity, field


def _packet(data: bytes, verbosity=Verbosity.HIGH) -> Packet:
    return Packet(data, verbosity)


def test_low_verbosity_prefix():
    assert dhcp.dump(_packet(b"\x35\x01\x05\xff", Verbosity.LOW)) == "> DHCP "


def test_medium_lists_option_codes():
    out = dhcp.dump(_packet(b"\x35\x01\x05\x00\xff", Verbosity.MEDIUM))
    assert out == "DHCP => Options : 53, 0, 255\n"


def test_high_message_type():
    out = dhcp.dump(_packet(b"\x35\x01\x05\xff"))
    assert out == "--- BEGIN DHCP MESSAGE ---\n" + field("DHCP Msg Type", "ACK") + "\n\n"


def test_router_option():
    line = dhcp.format_option(_packet(b"\x03\x04\xc0\xa8\x01\x01"), 2, 3, 4)
    assert line == field("Router", "192.168.1.1")


def test_multiple_ipv4s():
    data = b"\x06\x08\x0a\x00\x00\x01\x0a\x00\x00\x02"
    line = dhcp.format_option(_packet(data), 2, 6, 8)
    assert line == field("Domain Server", "10.0.0.1, 10.0.0.2")


def test_u32_option():
    data = b"\x33\x04" + (3600).to_bytes(4, "big")
    assert dhcp.format_option(_packet(data), 2, 0x33, 4) == field("Address Time", "3600")


def test_string_option():
    data = b"\x0c\x04host"
    assert dhcp.format_option(_packet(data), 2, 0x0C, 4) == field("Hostname", "host")


def test_parameter_list():
    data = b"\x37\x03\x01\x03\x06"
    assert dhcp.format_option(_packet(data), 2, 0x37, 3) == field("Parameter List", "0x1, 0x3, 0x6")


def test_unimplemented_option():
    data = b"\x77\x02ab"
    assert dhcp.format_option(_packet(data), 2, 0x77, 2) == field("Domain Search", "Unimplemented")


def test_default_option_prints_hex():
    data = b"\xfa\x02\xab\xcd"
    assert dhcp.format_option(_packet(data), 2, 0xFA, 2) == field("Unknown", "abcd")


def test_architecture_option():
    data = b"\x5d\x02\x00\x07"
    assert dhcp.format_option(_packet(data), 2, 0x5D, 2) == field("Client System", "EFI BC\n")


def test_option_overflow_raises():
    with pytest.raises(BufferOverflowError):
        dhcp.format_option(_packet(b"\x03\x08\x01\x02"), 2, 3, 8)


def test_dump_missing_length_byte_raises():
    with pytest.raises(BufferOverflowError):
        dhcp.dump(_packet(b"\x35"))


def test_dump_option_running_past_end_raises():
    with pytest.raises(BufferOverflowError):
        dhcp.dump(_packet(b"\x03\x08\x01\x02"))


def test_pad_bytes_are_skipped_in_detail():
    with_pad = dhcp.dump(_packet(b"\x00\x00\x35\x01\x01\xff"))
    without_pad = dhcp.dump(_packet(b"\x35\x01\x01\xff"))
    assert with_pad == without_pad
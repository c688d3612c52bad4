import struct

import pytest

from blahajdissect import wireguard
from blahajdissect.protocol import BufferOverflowError, Packet, Verbosity, field


SENDER = 0xABCDEF01
RECEIVER = 0x10203040


def _first_message():
    return (
        b"\x01\x00\x00\x00"
        + struct.pack("<I", SENDER)
        + bytes([0xAB]) * 32
        + bytes([0x0C]) * 48
        + bytes([0x0D]) * 28
        + bytes([0xEE]) * 16
        + bytes([0xFF]) * 16
    )


def _second_message():
    return (
        b"\x02\x00\x00\x00"
        + struct.pack("<I", SENDER)
        + struct.pack("<I", RECEIVER)
        + bytes([12]) * 32
        + bytes([7]) * 16
        + bytes([0xAA]) * 16
        + bytes([0xBB]) * 16
    )


def _data_message(counter, payload):
    return b"\x04\x00\x00\x00" + struct.pack("<I", RECEIVER) + struct.pack("<Q", counter) + payload


def test_dump_low():
    assert wireguard.dump(Packet(_first_message(), Verbosity.LOW)) == "> WireGuard "


def test_dump_medium_names():
    assert wireguard.dump(Packet(_first_message(), Verbosity.MEDIUM)) == "Wireguard => First message\n"
    assert wireguard.dump(Packet(_second_message(), Verbosity.MEDIUM)) == "Wireguard => Second message\n"
    assert wireguard.dump(Packet(_data_message(1, b""), Verbosity.MEDIUM)) == "Wireguard => Data message\n"


def test_first_message_detail():
    lines = wireguard.dump(Packet(_first_message(), Verbosity.HIGH)).splitlines()
    assert lines[0] == "--- BEGIN WIREGUARD BUFFER ---"
    assert lines[1] == field("Message type", "1 (First message)")
    assert lines[2] == field("Sender index", f"0x{SENDER:x}")
    assert lines[3] == field("Unencrypted ephemeral", "0x" + "ab" * 32)
    assert lines[4] == field("Encrypted static", "0x" + "c" * 48)
    assert lines[5] == field("Encrypted timestamp", "0x" + "d" * 28)
    assert lines[6] == field("MAC 1", "ee" * 16)
    assert lines[7] == field("MAC 2", "ff" * 16)


def test_second_message_detail_shows_ephemeral_in_decimal():
    lines = wireguard.dump(Packet(_second_message(), Verbosity.HIGH)).splitlines()
    assert lines[1] == field("Message type", "2 (Second message)")
    assert lines[2] == field("Sender index", f"0x{SENDER:x}")
    assert lines[3] == field("Receiver index", f"0x{RECEIVER:x}")
    assert lines[4] == field("Unencrypted ephemeral", "0x" + "12" * 32)
    assert lines[5] == field("Encrypted nothing", "0x" + "7" * 16)
    assert lines[6] == field("MAC 1", "aa" * 16)


def test_data_message_detail():
    lines = wireguard.dump(Packet(_data_message(7, b"\xde\xad"), Verbosity.HIGH)).splitlines()
    assert lines[1] == field("Message type", "4 (Data message)")
    assert lines[2] == field("Receiver index", f"0x{RECEIVER:x}")
    assert lines[3] == field("Counter", 7)
    assert lines[4] == field("Raw data", "de ad ")


def test_unknown_type_only_has_banner():
    out = wireguard.dump(Packet(b"\x03\x00\x00\x00", Verbosity.HIGH))
    assert out == "--- BEGIN WIREGUARD BUFFER ---\n"


def test_truncated_first_message_raises():
    with pytest.raises(BufferOverflowError):
        wireguard.dump(Packet(_first_message()[:-1], Verbosity.HIGH))


def test_truncated_data_message_raises():
    with pytest.raises(BufferOverflowError):
        wireguard.dump(Packet(_data_message(1, b"")[:10], Verbosity.HIGH))


def test_short_header_raises():
    with pytest.raises(BufferOverflowError):
        wireguard.dump(Packet(b"\x01\x00", Verbosity.LOW))
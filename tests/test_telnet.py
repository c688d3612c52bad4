import pytest

from blahajdissect import telnet
from blahajdissect.protocol import BufferOverflowError, Packet, Verbosity
from blahajdissect.text import TRUNCATED


def _bold(text):
    return f"\033[1m[{text}]\033[22m"


def test_option_names():
    assert telnet.option_name(1) == "Echo"
    assert telnet.option_name(24) == "Terminal type"
    assert telnet.option_name(140) == "Telopt pragma heartbeat"
    assert telnet.option_name(200) == "Unknown"


def test_command_names():
    assert telnet.command_name(251) == "Will"
    assert telnet.command_name(241) == "NOP"
    assert telnet.command_name(255) == "IAC"
    assert telnet.command_name(100) == "Unknown"


def test_low_verbosity():
    assert telnet.dump(Packet(b"abc", Verbosity.LOW)) == "> TELNET "


def test_empty_packet_gives_nothing():
    assert telnet.dump(Packet(b"", Verbosity.HIGH)) == ""
    assert telnet.dump(Packet(b"", Verbosity.MEDIUM)) == ""


def test_detail_with_negotiation():
    out = telnet.dump(Packet(b"hi\xff\xfb\x01ok", Verbosity.HIGH))
    assert out == "--- BEGIN TELNET MESSAGE ---\nhi" + _bold("Will Echo") + "ok\n"


def test_detail_with_single_byte_command():
    out = telnet.dump(Packet(b"\xff\xf1x", Verbosity.HIGH))
    assert out == "--- BEGIN TELNET MESSAGE ---\n" + _bold("NOP") + "x\n"


def test_detail_plain_text_round_trips():
    text = "login: guest"
    out = telnet.dump(Packet(text.encode(), Verbosity.HIGH))
    assert out == f"--- BEGIN TELNET MESSAGE ---\n{text}\n"


def test_missing_option_raises():
    with pytest.raises(BufferOverflowError):
        telnet.dump(Packet(b"a\xff\xfb", Verbosity.HIGH))


def test_trailing_iac_raises():
    with pytest.raises(BufferOverflowError):
        telnet.dump(Packet(b"a\xff", Verbosity.MEDIUM))


def test_summary_truncates_at_line_break():
    out = telnet.dump(Packet(b"user\r\nmore stuff", Verbosity.MEDIUM))
    assert out == "TELNET => user" + TRUNCATED + "\n"


def test_summary_without_line_break():
    out = telnet.dump(Packet(b"abc\xff\xfd\x03", Verbosity.MEDIUM))
    assert out == "TELNET => abc" + _bold("Do Suppress go ahead") + "\n"
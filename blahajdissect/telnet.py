"""Telnet dissector: shows the text stream and decodes IAC command sequences."""

from __future__ import annotations

from blahajdissect.protocol import Packet, Verbosity
from blahajdissect.text import TRUNCATED

IAC = 0xFF

_OPTIONS = {
    0: "Binary transmission",
    1: "Echo",
    2: "Reconnection",
    3: "Suppress go ahead",
    4: "Approximative message size notification",
    5: "Status",
    6: "Timing mark",
    7: "Remote controlled trans and echo",
    8: "Output line width",
    9: "Output page size",
    10: "Output carriage-return disposition",
    11: "Output horizontal tab stops",
    12: "Output horizontal tab disposition",
    13: "Output formfeed disposition",
    14: "Output vertical tabstops",
    15: "Output vertical tab disposition",
    16: "Output linefeed disposition",
    17: "Extended ASCII",
    18: "Logout",
    19: "Byte macro",
    20: "Data entry terminal",
    21: "Supdup",
    22: "Supdup output",
    23: "Send location",
    24: "Terminal type",
    25: "End of record",
    26: "TACACS user identification",
    27: "Output marking",
    28: "Terminal location number",
    29: "Telnet 3270 regime",
    30: "X.3 pad",
    31: "Negociate about window size",
    32: "Terminal speed",
    33: "Remote flow control",
    34: "Linemode",
    35: "X display location",
    36: "Environment option",
    37: "Authentication option",
    38: "Encryption option",
    39: "New environment option",
    40: "TN3270E",
    41: "XAUTH",
    42: "Charset",
    43: "Telnet remote serial port",
    44: "Com port control option",
    45: "Telnet suppress local echo",
    46: "Telnet start TLS",
    47: "Kermit",
    48: "Send URL",
    49: "Forward-X",
    138: "Telopt pragma logon",
    139: "Telopt sspi logon",
    140: "Telopt pragma heartbeat",
}

_COMMANDS = {
    240: "End of subnegocation parameters",
    241: "NOP",
    242: "Data mark",
    243: "Break",
    244: "Interrupt process",
    245: "Abort output",
    246: "Are you there ?",
    247: "Erase character",
    248: "Erase line",
    249: "Go ahead",
    250: "Subnegociation",
    251: "Will",
    252: "Won't",
    253: "Do",
    254: "Don't",
    255: "IAC",
}

_NEGOTIATIONS = frozenset({251, 252, 253, 254})


def option_name(code: int) -> str:
    """Return the name of a Telnet option code."""
    return _OPTIONS.get(code, "Unknown")


def command_name(code: int) -> str:
    """Return the name of a Telnet command that follows an IAC byte."""
    return _COMMANDS.get(code, "Unknown")


def _special(packet: Packet, offset: int) -> tuple[str, int]:
    """Render the command at ``offset`` and return it with the number of bytes used."""
    code = packet.byte(offset)
    name = command_name(code)
    used = 1
    if code in _NEGOTIATIONS:
        name = f"{name} {option_name(packet.byte(offset + 1))}"
        used = 2
    return f"\033[1m[{name}]\033[22m", used


def _detail(packet: Packet) -> str:
    data = packet.data
    parts = ["--- BEGIN TELNET MESSAGE ---\n"]
    index = 0
    while index < len(data):
        byte = data[index]
        if byte == IAC:
            text, used = _special(packet, index + 1)
            parts.append(text)
            index += used + 1
            continue
        parts.append(chr(byte))
        index += 1
    parts.append("\n")
    return "".join(parts)


def _summary(packet: Packet) -> str:
    data = packet.data
    parts = ["TELNET => "]
    index = 0
    while index < len(data):
        byte = data[index]
        if byte in (10, 13):
            if index < len(data) - 2:
                parts.append(TRUNCATED)
            parts.append("\n")
            return "".join(parts)
        if byte == IAC:
            text, used = _special(packet, index + 1)
            parts.append(text)
            index += used + 1
            continue
        parts.append(chr(byte))
        index += 1
    parts.append("\n")
    return "".join(parts)


def dump(packet: Packet) -> str:
    """Return the dump of a Telnet payload."""
    if packet.verbosity == Verbosity.LOW:
        return "> TELNET "
    if not packet.data:
        return ""
    if packet.verbosity == Verbosity.MEDIUM:
        return _summary(packet)
    return _detail(packet)
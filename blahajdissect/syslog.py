"""Syslog dissector: decodes the PRI field into facility and severity."""

from __future__ import annotations

from blahajdissect.protocol import (
    BufferOverflowError,
    InvalidValuesError,
    Packet,
    Verbosity,
    field,
)

_FACILITIES = (
    "KERNEL",
    "USER",
    "MAIL",
    "SYSTEM DAEMONS",
    "SECURITY",
    "SYSLOGD",
    "LINE PRINTER",
    "NETWORK NEWS",
    "UUCP",
    "CLOCK",
    "SECURITY",
    "FTP",
    "NTP",
    "LOG AUDIT",
    "LOG ALERT",
    "CLOCK (note 2)",
    "LOCAL0",
    "LOCAL1",
    "LOCAL2",
    "LOCAL3",
    "LOCAL4",
    "LOCAL5",
    "LOCAL6",
    "LOCAL7",
)

_SEVERITIES = (
    "EMERGENCY",
    "ALERT",
    "CRITICAL",
    "ERROR",
    "WARNING",
    "NOTICE",
    "INFO",
    "DEBUG",
)

_MAX_PRI_DIGITS = 4


def facility_name(facility: int) -> str:
    """Return the name of a syslog facility number."""
    if 0 <= facility < len(_FACILITIES):
        return _FACILITIES[facility]
    return "UNKNOWN"


def severity_name(severity: int) -> str:
    """Return the name of a syslog severity number."""
    if 0 <= severity < len(_SEVERITIES):
        return _SEVERITIES[severity]
    return "UNKNOWN"


def parse_pri(data: bytes) -> tuple[int, int]:
    """Parse the ``<PRI>`` prefix of a syslog message.

    Return the PRI value (truncated to one byte) and the offset where the
    message text starts.
    """
    if len(data) < 4:
        raise BufferOverflowError(f"a syslog message needs at least 4 bytes, got {len(data)}")
    digits = []
    stop = 1
    while stop <= _MAX_PRI_DIGITS and stop < len(data) and 0x30 <= data[stop] <= 0x39:
        digits.append(chr(data[stop]))
        stop += 1
    if not digits:
        raise InvalidValuesError("syslog message has no valid PRI")
    return int("".join(digits)) & 0xFF, stop + 1


def _split(pri: int) -> tuple[int, int]:
    return pri >> 3, pri & 0x7


def dump(packet: Packet) -> str:
    """Return the dump of a syslog message."""
    if packet.verbosity == Verbosity.LOW:
        return "> SysLog "
    pri, message_offset = parse_pri(packet.data)
    facility, severity = _split(pri)
    if packet.verbosity == Verbosity.MEDIUM:
        return (
            f"Syslog => Facility : {facility_name(facility)}, "
            f"Severity : {severity_name(severity)}\n"
        )
    message = "".join(chr(byte) for byte in packet.data[message_offset:])
    lines = [
        "--- BEGIN SYSLOG MESSAGE ---",
        field("Facility", f"{facility} ({facility_name(facility)})"),
        field("Severity", f"{severity} ({severity_name(severity)})"),
        field("Message", message),
    ]
    return "\n".join(lines) + "\n"
"""Dissectors for line-based text protocols: FTP, HTTP, IMAP, POP3, SMTP, SSDP and WHOIS."""

from __future__ import annotations

from dataclasses import dataclass

from blahajdissect.protocol import Packet, Verbosity

TRUNCATED = "\033[1m[Output truncated]\033[22m"


@dataclass(frozen=True)
class _TextProtocol:
    short_name: str
    summary_prefix: str
    detail_title: str
    printable_only: bool = False


_FTP = _TextProtocol("FTP", "FTP", "--- BEGIN FTP MESSAGE ---")
_HTTP = _TextProtocol("HTTP", "HTTP", "--- BEGIN HTTP MESSAGE ---", printable_only=True)
_IMAP = _TextProtocol("IMAP", "IMAP", "--- BEGIN IMAP BUFFER ---")
_POP = _TextProtocol("POP3", "POP3", "--- BEGIN POP3 BUFFER ---")
_SMTP = _TextProtocol("SMTP", "SMTP", "--- BEGIN SMTP BUFFER ---")
_SSDP = _TextProtocol("SSDP", "SSDP", "--- BEGIN SSDP MESSAGE ---")
_WHOIS = _TextProtocol("Whois", "Whois", "--- BEGIN WHOIS BUFFER ---")


def _render(byte: int, printable_only: bool, keep_line_breaks: bool) -> str:
    if not printable_only:
        return chr(byte)
    if 32 <= byte <= 126 or (keep_line_breaks and byte in (10, 13)):
        return chr(byte)
    return "."


def _summary(packet: Packet, proto: _TextProtocol) -> str:
    data = packet.data
    parts = [f"{proto.summary_prefix} => "]
    for index, byte in enumerate(data):
        if byte in (10, 13):
            if index < len(data) - 2:
                parts.append(TRUNCATED)
            parts.append("\n")
            return "".join(parts)
        parts.append(_render(byte, proto.printable_only, keep_line_breaks=False))
    parts.append("\n")
    return "".join(parts)


def _detail(packet: Packet, proto: _TextProtocol) -> str:
    body = "".join(
        _render(byte, proto.printable_only, keep_line_breaks=True) for byte in packet.data
    )
    return f"{proto.detail_title}\n{body}\n"


def _dump(packet: Packet, proto: _TextProtocol) -> str:
    if packet.verbosity == Verbosity.LOW:
        return f"> {proto.short_name} "
    if not packet.data:
        return ""
    if packet.verbosity == Verbosity.MEDIUM:
        return _summary(packet, proto)
    return _detail(packet, proto)


def ftp_dump(packet: Packet) -> str:
    """Return the dump of an FTP payload."""
    return _dump(packet, _FTP)


def http_dump(packet: Packet) -> str:
    """Return the dump of an HTTP payload, with unprintable bytes shown as dots."""
    return _dump(packet, _HTTP)


def imap_dump(packet: Packet) -> str:
    """Return the dump of an IMAP payload."""
    return _dump(packet, _IMAP)


def pop_dump(packet: Packet) -> str:
    """Return the dump of a POP3 payload."""
    return _dump(packet, _POP)


def smtp_dump(packet: Packet) -> str:
    """Return the dump of an SMTP payload."""
    return _dump(packet, _SMTP)


def ssdp_dump(packet: Packet) -> str:
    """Return the dump of an SSDP payload."""
    return _dump(packet, _SSDP)


def whois_dump(packet: Packet) -> str:
    """Return the dump of a WHOIS payload."""
    return _dump(packet, _WHOIS)
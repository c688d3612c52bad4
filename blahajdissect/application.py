"""Choice of the application-layer dissector from the transport and port."""

from __future__ import annotations

import enum
from typing import Callable, Optional

from blahajdissect import bootp, dns, mqtt, rip, ripng, syslog, telnet, tls, wireguard
from blahajdissect.protocol import Packet
from blahajdissect.text import (
    ftp_dump,
    http_dump,
    imap_dump,
    pop_dump,
    smtp_dump,
    ssdp_dump,
    whois_dump,
)

Dissector = Callable[[Packet], str]


class Transport(enum.Enum):
    """Transport protocols that carry application payloads."""

    SCTP = "sctp"
    TCP = "tcp"
    UDP = "udp"


_DISSECTORS: dict[Transport, dict[int, Dissector]] = {
    Transport.UDP: {
        53: dns.dump,
        67: bootp.dump,
        68: bootp.dump,
        514: syslog.dump,
        520: rip.dump,
        521: ripng.dump,
        1900: ssdp_dump,
        5353: dns.dump,
        51000: wireguard.dump,
    },
    Transport.TCP: {
        21: ftp_dump,
        23: telnet.dump,
        25: smtp_dump,
        43: whois_dump,
        80: http_dump,
        110: pop_dump,
        143: imap_dump,
        443: tls.dump,
        1883: mqtt.dump,
    },
    Transport.SCTP: {
        80: http_dump,
    },
}

_NAMES: dict[Transport, dict[int, str]] = {
    Transport.UDP: {
        53: "DNS",
        67: "Bootp",
        68: "Bootp",
        443: "QUIC HTTP/3",
        514: "Syslog",
        520: "RIP",
        521: "RIPng",
        51000: "Wireguard",
    },
    Transport.TCP: {
        21: "FTP",
        23: "Telnet",
        25: "SMTP",
        43: "WHOIS",
        80: "HTTP",
        110: "POP3",
        143: "IMAP",
        443: "HTTPS",
    },
    Transport.SCTP: {
        80: "HTTP",
    },
}


def dissector_for(transport: Transport, port: int) -> Optional[Dissector]:
    """Return the dissector for ``port`` over ``transport``, or None if there is none."""
    return _DISSECTORS.get(transport, {}).get(port)


def application_name(transport: Transport, port: int) -> str:
    """Return the name of the application usually found on ``port`` over ``transport``."""
    return _NAMES.get(transport, {}).get(port, "Unknown")


def dump(transport: Transport, port: int, packet: Packet) -> str:
    """Dissect ``packet`` with the dissector for ``port`` over ``transport``."""
    dissector = dissector_for(transport, port)
    if dissector is None:
        raise LookupError(f"no application dissector for {transport.name} port {port}")
    return dissector(packet)
# blahajdissect

Decoders for application-layer network protocols. You pass the payload of a
UDP, TCP or SCTP segment to a dissector. It returns a text description of the
message, in as much detail as you ask for.

Dissectors are registered for these ports:

- **UDP:** DNS (53) and mDNS (5353), BOOTP/DHCP (67, 68), Syslog (514),
  RIP (520), RIPng (521), SSDP (1900), WireGuard (51000)
- **TCP:** FTP (21), Telnet (23), SMTP (25), WHOIS (43), HTTP (80), POP3 (110),
  IMAP (143), TLS (443), MQTT (1883)
- **SCTP:** HTTP (80)

## Installation

```
pip install blahajdissect
```

The package needs Python 3.10 or later. It has no runtime dependencies.

## Verbosity levels

A `Packet` holds the payload bytes and a `Verbosity`, which defaults to
`Verbosity.HIGH`. Every dissector follows that verbosity:

- `Verbosity.LOW` returns a single tag, such as `"> DNS "`.
- `Verbosity.MEDIUM` returns a one-line summary, such as
  `"DNS => Query type : Query, [Domain : example.com, Query type : A]\n"`.
- `Verbosity.HIGH` returns every field on its own line, as `label = value`,
  under a `--- BEGIN ... ---` banner.

## Usage

```python
from blahajdissect.protocol import Packet, Verbosity
from blahajdissect.application import Transport, dump, application_name

payload = bytes.fromhex(
    "123401000001000000000000076578616d706c6503636f6d0000010001"
)
packet = Packet(payload, verbosity=Verbosity.HIGH)

print(application_name(Transport.UDP, 53))   # DNS
print(dump(Transport.UDP, 53, packet), end="")
```

`dissector_for(transport, port)` returns the dissector function for a port,
or `None` if no dissector is registered for it. `application.dump` raises
`LookupError` when no dissector is registered for the port.
`application_name(transport, port)` gives the name of the service usually
found on a port, and `"Unknown"` otherwise. Its table is separate from the
dissector table. For example, UDP 443 is named `"QUIC HTTP/3"` but has no
dissector.

Each protocol module also offers its own `dump(packet)`:
`blahajdissect.dns`, `bootp`, `dhcp`, `syslog`, `rip`, `ripng`, `wireguard`,
`telnet`, `tls` and `mqtt`. The plain-text protocols are handled in
`blahajdissect.text` by `ftp_dump`, `http_dump`, `imap_dump`, `pop_dump`,
`smtp_dump`, `ssdp_dump` and `whois_dump`.

The modules also provide lookup helpers, such as `dns.qtype_name`,
`dns.read_name`, `tls.version_name`, `syslog.parse_pri`,
`mqtt.decode_varint` and `dhcp.format_option`. The formatters for DHCP
option values live in `blahajdissect.dhcp_values`.

## Errors

A truncated message claims more data than the buffer holds. For such a message,
the dissector raises `BufferOverflowError`. It raises `InvalidValuesError` for
values that make no sense. Examples are a DNS compression pointer that leads to
another pointer, a Syslog message with no PRI digits, and an MQTT length longer
than four bytes. Both errors subclass `DissectError`, which is itself a
`ValueError`:

```python
from blahajdissect.protocol import DissectError

try:
    dump(Transport.UDP, 53, packet)
except DissectError as exc:
    print(f"malformed packet: {exc}")
```

## Helpers

`blahajdissect.protocol` also provides the following:

- `field(label, value)` formats a `label = value` line, with the label padded to
  45 characters.
- `format_ipv4(raw)` and `format_ipv6(raw)` turn 4 or 16 raw bytes into text.
- The `Packet` readers `byte`, `u16`, `u32`, `u64` (big-endian) and `take`
  raise `BufferOverflowError` when a read goes past the end of the buffer.

## What this package does not do

This package works on application payloads you already have. It does not:

- capture traffic or read capture files;
- decode link, network or transport headers;
- reassemble fragments or streams;
- offer a command-line tool.

A payload on a port with no registered dissector is not dumped as raw bytes.
`application.dump` raises `LookupError` for it instead.

## Running the tests

```
pip install "blahajdissect[test]"
pytest
```
"""Name tables and value formatters for DHCP options."""

from __future__ import annotations

from blahajdissect.protocol import BufferOverflowError, Packet, field, format_ipv4

_UNKNOWN = "Unknown"

_PXE = "PXE - undefined (vendor specific)"
_ETHERBOOT_TENTATIVE = "Etherboot (Tentatively Assigned - 2005-06-23)"

# Option codes with no entry here are reported as "Unknown".
_COMMANDS: dict[int, str] = {
    0: "PAD", 1: "Subnet Mask", 2: "Time Offset", 3: "Router",
    4: "Time Server", 5: "Name Server", 6: "Domain Server", 7: "Log Server",
    8: "Quotes Server", 9: "LPR Server", 10: "Impress Server", 11: "RLP Server",
    12: "Hostname", 13: "Boot File Size", 14: "Merit Dump File", 15: "Domain Name",
    16: "Swap Server", 17: "Root Path", 18: "Extension File", 19: "Forward On/Off",
    20: "SrcRte On/Off", 21: "Policy Filter", 22: "Max DG Assembly", 23: "Default IP TTL",
    24: "MTU Timeout", 25: "MTU Plateau", 26: "MTU Interface", 27: "MTU Subnet",
    28: "Broadcast Address", 29: "Mask Discovery", 30: "Mask Supplier", 31: "Router Discovery",
    32: "Router Request", 33: "Static Route", 34: "Trailers", 35: "ARP Timeout",
    36: "Ethernet", 37: "Default TCP TTL", 38: "Keepalive Time", 39: "Keepalive Data",
    40: "NIS Domain", 41: "NIS Servers", 42: "NTP Servers", 43: "Vendor Specific",
    44: "NETBIOS Name Srv", 45: "NETBIOS Dist Srv", 46: "NETBIOS Node Type", 47: "NETBIOS Scope",
    48: "X Window Font", 49: "X Window Manager", 50: "Address Request", 51: "Address Time",
    52: "Overload", 53: "DHCP Msg Type", 54: "DHCP Server Id", 55: "Parameter List",
    56: "DHCP Message", 57: "DHCP Max Msg Size", 58: "Renewal Time", 59: "Rebinding Time",
    60: "Class Id", 61: "Client Id", 62: "NetWare/IP Domain", 63: "NetWare/IP Option",
    64: "NIS-Domain-Name", 65: "NIS-Server-Addr", 66: "Server-Name", 67: "Bootfile-Name",
    68: "Home-Agent-Addrs", 69: "SMTP-Server", 70: "POP3-Server", 71: "NNTP-Server",
    72: "WWW-Server", 73: "Finger-Server", 74: "IRC-Server", 75: "StreetTalk-Server",
    76: "STDA-Server", 77: "User-Class", 78: "Directory Agent", 79: "Service Scope",
    80: "Rapid Commit", 81: "Client FQDN", 82: "Relay Agent Information", 83: "iSNS",
    84: "REMOVED/Unassigned", 85: "NDS Servers", 86: "NDS Tree Name", 87: "NDS Context",
    88: "BCMCS Controller Domain Name list",
    89: "BCMCS Controller IPv4 address option",
    90: "Authentication",
    91: "client-last-transaction-time option",
    92: "associated-ip option",
    93: "Client System", 94: "Client NDI", 95: "LDAP", 96: "REMOVED/Unassigned",
    97: "UUID/GUID", 98: "User-Auth", 99: "GEOCONF_CIVIC", 100: "PCode", 101: "TCode",
    108: "IPv6-Only Preferred", 109: "OPTION_DHCP4O6_S46_SADDR",
    110: "REMOVED/Unassigned", 111: "Unassigned",
    112: "Netinfo Address", 113: "Netinfo Tag", 114: "DHCP Captive-Portal",
    115: "REMOVED/Unassigned", 116: "Auto-Config", 117: "Name Service Search",
    118: "Subnet Selection Option", 119: "Domain Search", 120: "SIP Servers DHCP Option",
    121: "Classless Static Route Option", 122: "CCC", 123: "GeoConf Option",
    124: "V-I Vendor Class", 125: "V-I Vendor-Specific Information",
    126: "Removed/Unassigned", 127: "Removed/Unassigned",
    128: f"{_PXE} | Etherboot signature. 6 bytes: E4:45:74:68:00:00 | "
         "DOCSIS \"full security\" server IP address | "
         "TFTP Server IP address (for IP Phone software load)",
    129: f"{_PXE} | Kernel options. Variable length string | Call Server IP address",
    130: f"{_PXE} | Ethernet interface. Variable length string. | "
         "Discrimination string (to identify vendor)",
    131: f"{_PXE} | Remote statistics server IP address",
    132: f"{_PXE} | IEEE 802.1Q VLAN ID",
    133: f"{_PXE} | IEEE 802.1D/p Layer 2 Priority",
    134: f"{_PXE} | Diffserv Code Point (DSCP) for VoIP signalling and media streams",
    135: f"{_PXE} | HTTP Proxy for phone-specific applications",
    136: "OPTION_PANA_AGENT", 137: "OPTION_V4_LOST", 138: "OPTION_CAPWAP_AC_V4",
    139: "OPTION-IPv4_Address-MoS", 140: "OPTION-IPv4_FQDN-MoS",
    141: "SIP UA Configuration Service Domains", 142: "OPTION-IPv4_Address-ANDSF",
    143: "OPTION_V4_SZTP_REDIRECT", 144: "GeoLoc", 145: "FORCERENEW_NONCE_CAPABLE",
    146: "RDNSS Selection", 147: "OPTION_V4_DOTS_RI", 148: "OPTION_V4_DOTS_ADDRESS",
    149: "Unassigned",
    150: "TFTP server address | Etherboot | GRUB configuration path name",
    151: "status-code", 152: "base-time", 153: "start-time-of-state",
    154: "query-start-time", 155: "query-end-time", 156: "dhcp-state",
    157: "data-source", 158: "OPTION_V4_PCP_SERVER", 159: "OPTION_V4_PORTPARAMS",
    160: "Unassigned", 161: "OPTION_MUD_URL_V4", 162: "OPTION_V4_DNR",
    175: _ETHERBOOT_TENTATIVE,
    176: "IP Telephone (Tentatively Assigned - 2005-06-23)",
    177: f"{_ETHERBOOT_TENTATIVE} | PacketCable and CableHome (replaced by 122)",
    208: "PXELINUX Magic", 209: "Configuration File", 210: "Path Prefix",
    211: "Reboot Time", 212: "OPTION_6RD", 213: "OPTION_V4_ACCESS_DOMAIN",
    220: "Subnet Allocation Option", 221: "Virtual Subnet Selection (VSS) Option",
    255: "End",
}

_MESSAGE_TYPES: dict[int, str] = {
    0: "UNKNOWN", 1: "DISCOVER", 2: "OFFER", 3: "REQUEST", 4: "DECLINE",
    5: "ACK", 6: "NAK", 7: "RELEASE", 8: "INFORM", 9: "FORCERENEW",
    10: "LEASEQUERY", 11: "LEASEUNASSIGNED", 12: "LEASEUNKNOWN", 13: "LEASEACTIVE",
    14: "PUBLKLEASEQUERY", 15: "LEASEQUERYDONE", 16: "ACTIVELEASEQUERY",
    17: "LEASEQUERYSTATUS", 18: "TLS",
}

_TSP = "TSP's"
_CABLELABS_SUBOPTIONS: dict[int, str] = {
    0: f"{_TSP} Primary DHCP Server Address",
    1: f"{_TSP} Secondary DHCP Server Address",
    2: f"{_TSP} Provisioning Server Address",
    3: f"{_TSP} AS-REQ/AS-REP Backoff and Retry",
    4: f"{_TSP} AP-REQ/AP-REP Backoff and Retry",
    5: f"{_TSP} Kerberos Realm Name",
    6: f"{_TSP} Ticket Granting Server Utilization",
    7: f"{_TSP} Provisioning Timer Value",
}

GEO_LENGTH = 16
_ALL_ONES_NETMASK = bytes([0xFF] * 4)

# (name, bit position, width) of the packed geolocation bit fields, least significant first.
_GEO_FIELDS = (
    ("la_res", 0, 6),
    ("latitude", 6, 34),
    ("lo_res", 40, 6),
    ("longitude", 46, 34),
    ("a_type", 80, 4),
    ("a_res", 84, 6),
    ("altitude", 90, 30),
    ("ver", 120, 2),
    ("res", 122, 3),
    ("datum", 125, 3),
)


def command_name(code: int) -> str:
    """Return the name of a DHCP option code."""
    return _COMMANDS.get(code, _UNKNOWN)


def message_type_name(code: int) -> str:
    """Return the name of a DHCP message type."""
    return _MESSAGE_TYPES.get(code, "UNKNOWN")


def cablelabs_suboption_name(code: int) -> str:
    """Return the name of a CableLabs client configuration sub-option."""
    return _CABLELABS_SUBOPTIONS.get(code, _UNKNOWN)


def format_ipv4s(packet: Packet, offset: int, length: int) -> str:
    """Format the IPv4 addresses held in ``length`` bytes at ``offset``."""
    if offset + length > len(packet):
        raise BufferOverflowError(f"option of {length} bytes at offset {offset} runs past the buffer")
    parts = []
    for position in range(0, length, 4):
        parts.append(format_ipv4(packet.take(offset + position, 4)))
        if position < length - 4:
            parts.append(", ")
    return "".join(parts)


def format_client_id(packet: Packet, offset: int) -> str:
    """Format a client identifier option; only Ethernet identifiers are decoded."""
    if packet.byte(offset) == 0x1:
        return ":".join(f"{byte:x}" for byte in packet.take(offset + 1, 6))
    return _UNKNOWN


def format_client_fqdn(packet: Packet, offset: int, length: int) -> str:
    """Format a client FQDN option, with its flags on a second line when any are set."""
    if offset + length > len(packet):
        raise BufferOverflowError(f"option of {length} bytes at offset {offset} runs past the buffer")
    name = "".join(chr(byte) for byte in packet.data[offset + 3:offset + length])
    flags = packet.byte(offset)
    if not flags:
        return name
    letters = "".join(letter for bit, letter in ((3, "N"), (2, "E"), (1, "O"), (0, "S")) if (flags >> bit) & 1)
    return f"{name}\n{field('Flags', letters)}"


def format_relay_agent_information(packet: Packet, offset: int, length: int) -> str:
    """Format the sub-options of a relay agent information option."""
    parts = []
    position = 0
    while position < length:
        if offset + position + 1 >= len(packet):
            raise BufferOverflowError(f"relay agent sub-option at offset {offset + position} is truncated")
        suboption = packet.byte(offset + position)
        sublength = packet.byte(offset + position + 1)
        if offset + position + sublength > len(packet):
            raise BufferOverflowError(f"relay agent sub-option at offset {offset + position} is truncated")
        start = offset + position
        parts.append(f"{suboption} -> ")
        parts.append("".join(f"{byte:x}" for byte in packet.data[start:start + sublength]))
        position += sublength + 2
        if position == length - 1:
            break
        parts.append(", ")
    return "".join(parts)


def _significant_octets(mask_length: int) -> int:
    if mask_length > 24:
        return 5
    if mask_length > 16:
        return 4
    if mask_length > 8:
        return 3
    if mask_length > 0:
        return 2
    return 1


def format_classless_routes(packet: Packet, offset: int, length: int) -> str:
    """Format the routes of a classless static route option."""
    parts = []
    position = 0
    while position < length:
        if offset + position + 5 > len(packet):
            raise BufferOverflowError(f"classless route at offset {offset + position} is truncated")
        mask_length = packet.byte(offset + position)
        subnet = packet.u32(offset + position + 1)
        for bit in range(max(0, 32 - mask_length)):
            subnet ^= 1 << bit
        subnet_text = format_ipv4(subnet.to_bytes(4, "little"))
        position += _significant_octets(mask_length)
        if offset + position + 4 > len(packet):
            raise BufferOverflowError(f"classless route router at offset {offset + position} is truncated")
        router_text = format_ipv4(packet.take(offset + position, 4))
        parts.append(f"Subnet -> {subnet_text}; ")
        parts.append(f"Netmask -> {format_ipv4(_ALL_ONES_NETMASK)}; ")
        parts.append(f"Router -> {router_text}; ")
        position += 4
    return "".join(parts)


def format_vendor(packet: Packet, offset: int, length: int) -> str:
    """Format vendor-identifying class or vendor-specific information entries."""
    parts = []
    position = offset
    while position < offset + length:
        parts.append("[")
        parts.append(f"Entreprise number -> {packet.u32(position)}; ")
        position += 4
        data_length = packet.byte(position)
        parts.append(f"Entreprise number -> {data_length}; ")
        position += 1
        parts.append("Vendor class data / options -> ")
        parts.append("".join(f"{byte:02x}" for byte in packet.take(position, data_length)))
        position += data_length
        parts.append("]")
    return "".join(parts)


def _geo_fields(raw: bytes) -> dict[str, int]:
    value = int.from_bytes(raw, "little")
    return {name: (value >> shift) & ((1 << width) - 1) for name, shift, width in _GEO_FIELDS}


def format_geo(packet: Packet, offset: int, loc: bool) -> str:
    """Format a geolocation option; ``loc`` adds the version field."""
    geo = _geo_fields(packet.take(offset, GEO_LENGTH))
    parts = [
        f"Latitude res -> {geo['la_res']}; ",
        f"Latitude -> {geo['latitude']}; ",
        f"Longitude res -> {geo['lo_res']}; ",
        f"Longitude -> {geo['longitude']}; ",
        f"Altitude type -> {geo['a_type']}; ",
        f"Altitude res -> {geo['a_res']}; ",
        f"Altitude -> {geo['altitude']}; ",
    ]
    if loc:
        parts.append(f"Version -> {geo['ver']}; ")
    parts.append(f"Datum -> {geo['datum']}")
    return "".join(parts)
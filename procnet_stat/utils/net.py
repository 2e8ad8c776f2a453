"""
Decoding of the hex tokens found in /proc/net/{tcp,udp,tcp6,udp6}.

The kernel prints each address as the raw in-memory words of the socket
struct, so on the hosts we care about every 32-bit word is little-endian:

    0100007F:0050   -> 127.0.0.1 port 80
    0000000000000000FFFF00000100007F:1F90
                    -> 0000:0000:0000:0000:0000:ffff:7f00:0001 port 8080

Ports are plain big-endian hex numbers. IPv6 addresses are always rendered
in exploded form (eight 4-digit groups, no zero compression).
"""
from __future__ import annotations
import ipaddress, re, socket, struct
from typing import Tuple

from ..errors import MalformedInput

IPV4_HEX_LEN = 8
IPV6_HEX_LEN = 32

_HEX_RE = re.compile(r"[0-9A-Fa-f]+")

def hex_to_int(token: str, bits: int = 32) -> int:
    if not isinstance(token, str) or not _HEX_RE.fullmatch(token):
        raise MalformedInput(f"not a hex number: {token!r}")
    value = int(token, 16)
    if value >= 1 << bits:
        raise MalformedInput(f"{token!r} does not fit in {bits} bits")
    return value

def ipv4_from_dword(dw: int) -> str:
    return socket.inet_ntoa(struct.pack('<I', dw))

def ipv6_from_words(words: Tuple[int, ...]) -> str:
    return ipaddress.IPv6Address(struct.pack('<4I', *words)).exploded

def decode_address(token: str) -> str:
    if len(token) == IPV6_HEX_LEN:
        return ipv6_from_words(tuple(hex_to_int(token[i:i + 8]) for i in range(0, IPV6_HEX_LEN, 8)))
    if len(token) == IPV4_HEX_LEN:
        return ipv4_from_dword(hex_to_int(token))
    raise MalformedInput(f"address token {token!r} has length {len(token)}, expected 8 or 32")

def decode_endpoint(token: str) -> Tuple[str, int]:
    addr, sep, port = token.partition(':')
    if not sep or ':' in port:
        raise MalformedInput(f"expected ADDR:PORT, got {token!r}")
    return decode_address(addr), hex_to_int(port, bits=16)

def encode_address(literal: str) -> str:
    packed = ipaddress.ip_address(literal).packed
    return "".join("%08X" % w for w in struct.unpack('<%dI' % (len(packed) // 4), packed))

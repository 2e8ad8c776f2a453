from __future__ import annotations
import logging
from typing import Iterable, List, Optional

from ..config import FAMILY, NO_STATE, UDP_PROTOCOLS, socket_state
from ..errors import MalformedInput, TruncatedRecord
from ..models import ConnectionRecord
from ..utils.net import decode_endpoint

log = logging.getLogger(__name__)

MIN_FIELDS = 4
UID_FIELD = 7
INODE_FIELD = 9

def _decimal_field(fields: List[str], idx: int) -> Optional[str]:
    if idx < len(fields) and fields[idx].isascii() and fields[idx].isdigit():
        return fields[idx]
    return None

def parse_line(raw: str, protocol: str) -> ConnectionRecord:
    """
    Decode one socket table line. A typical /proc/net/tcp entry:

       46: 010310AC:9C4C 030310AC:1770 01 00000150:00000000 01:00000019 00000000  1000  0 54165785 ...
       |   |        |    |        |    |                                         |        |--> inode
       |   |        |    |        |    |                                         |-----------> uid
       |   |        |    |        |    |--> connection state
       |   |        |    |        |-------> remote port
       |   |        |    |----------------> remote address
       |   |        |---------------------> local port
       |   |------------------------------> local address
       |----------------------------------> slot number
    """
    fields = raw.split()
    if len(fields) < MIN_FIELDS:
        raise TruncatedRecord(f"expected at least {MIN_FIELDS} fields, got {len(fields)}: {raw.strip()!r}")

    laddr = decode_endpoint(fields[1])
    raddr = decode_endpoint(fields[2])
    if (':' in laddr[0]) != (':' in raddr[0]):
        raise MalformedInput(f"local and remote address families differ: {raw.strip()!r}")
    family = 6 if ':' in laddr[0] else 4
    if protocol in FAMILY and FAMILY[protocol] != family:
        raise MalformedInput(f"IPv{family} address in {protocol} table: {raw.strip()!r}")

    state = NO_STATE if protocol in UDP_PROTOCOLS else socket_state(fields[3])

    return ConnectionRecord(
        protocol=protocol,
        local_address=laddr[0], local_port=laddr[1],
        remote_address=raddr[0], remote_port=raddr[1],
        state=state,
        uid=_decimal_field(fields, UID_FIELD),
        inode=_decimal_field(fields, INODE_FIELD),
    )

def parse_lines(lines: Iterable[str], protocol: str) -> List[ConnectionRecord]:
    records: List[ConnectionRecord] = []
    for lineno, line in enumerate(lines, start=2):
        try:
            records.append(parse_line(line, protocol))
        except TruncatedRecord as e:
            log.warning("%s line %d skipped: %s", protocol, lineno, e)
    return records

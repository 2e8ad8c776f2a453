from __future__ import annotations
import logging
from typing import List, Optional

from ..config import CFG, PROTOCOLS
from ..errors import UnsupportedProtocol
from ..models import ConnectionRecord
from .inode import resolve_owners
from .parser import parse_lines
from .procfs import read_table

log = logging.getLogger(__name__)

def netstat(protocol: str, cfg: Optional[CFG] = None, resolve: Optional[bool] = None) -> List[ConnectionRecord]:
    """Snapshot one socket table. Requires root to see other users' processes."""
    if protocol not in PROTOCOLS:
        raise UnsupportedProtocol(protocol)
    cfg = cfg or CFG()
    if resolve is None:
        resolve = cfg.resolve_owners

    records = parse_lines(read_table(protocol, cfg), protocol)
    if resolve:
        records = resolve_owners(records, cfg)
    log.debug("%s: %d record(s)", protocol, len(records))
    return records

def tcp(cfg: Optional[CFG] = None, resolve: Optional[bool] = None) -> List[ConnectionRecord]:
    return netstat("tcp", cfg, resolve)

def udp(cfg: Optional[CFG] = None, resolve: Optional[bool] = None) -> List[ConnectionRecord]:
    return netstat("udp", cfg, resolve)

def tcp6(cfg: Optional[CFG] = None, resolve: Optional[bool] = None) -> List[ConnectionRecord]:
    return netstat("tcp6", cfg, resolve)

def udp6(cfg: Optional[CFG] = None, resolve: Optional[bool] = None) -> List[ConnectionRecord]:
    return netstat("udp6", cfg, resolve)

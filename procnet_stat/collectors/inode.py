"""
Map socket inodes to the processes holding them open.

Every open descriptor of a process shows up as a symlink
/proc/<pid>/fd/<fd>; for sockets the link target reads ``socket:[<inode>]``.
Processes come and go while we walk the tree and most of them are not ours
to look at, so every lookup here is best-effort: anything that cannot be
read degrades to the placeholder values of :class:`ProcessInfo`.
"""
from __future__ import annotations
import dataclasses
import logging
import os
import pwd
import re
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from ..config import CFG
from ..models import NO_PID, NO_USER, ConnectionRecord, ProcessInfo

log = logging.getLogger(__name__)

SOCKET_RE = re.compile(r"^socket:\[(?P<inode>\d+)\]$")

def socket_inode(target: str) -> Optional[str]:
    m = SOCKET_RE.match(target)
    return m.group("inode") if m else None

def _numeric_entries(path: Path) -> List[str]:
    try:
        names = os.listdir(path)
    except OSError as e:
        log.debug("cannot list %s: %s", path, e)
        return []
    return sorted((n for n in names if n.isascii() and n.isdigit()), key=int)

def iter_socket_fds(cfg: Optional[CFG] = None) -> Iterator[Tuple[str, str]]:
    """Yield (pid, inode) for every socket descriptor we are allowed to see."""
    root = Path((cfg or CFG()).proc_root)
    for pid in _numeric_entries(root):
        fd_dir = root / pid / "fd"
        for fd in _numeric_entries(fd_dir):
            try:
                target = os.readlink(fd_dir / fd)
            except OSError:
                # closed between listdir and readlink
                continue
            inode = socket_inode(target)
            if inode is not None:
                yield pid, inode

def build_inode_index(cfg: Optional[CFG] = None) -> Mapping[str, str]:
    index: Dict[str, str] = {}
    for pid, inode in iter_socket_fds(cfg):
        index.setdefault(inode, pid)
    log.debug("inode index: %d socket(s)", len(index))
    return MappingProxyType(index)

def find_pid(inode: str, cfg: Optional[CFG] = None) -> str:
    for pid, candidate in iter_socket_fds(cfg):
        if candidate == inode:
            return pid
    return NO_PID

def process_exe(pid: str, cfg: Optional[CFG] = None) -> str:
    if pid == NO_PID:
        return ""
    try:
        return os.readlink(Path((cfg or CFG()).proc_root) / pid / "exe")
    except OSError as e:
        log.debug("no exe for pid %s: %s", pid, e)
        return ""

def process_name(exe: str) -> str:
    name = exe.rstrip("/").rsplit("/", 1)[-1]
    return name[:1].upper() + name[1:]

def lookup_user(uid: Optional[str]) -> str:
    if uid is None:
        return NO_USER
    try:
        return pwd.getpwuid(int(uid)).pw_name
    except (KeyError, ValueError, OverflowError):
        return NO_USER

def resolve_owner(inode: Optional[str], uid: Optional[str] = None,
                  cfg: Optional[CFG] = None,
                  index: Optional[Mapping[str, str]] = None) -> ProcessInfo:
    pid = NO_PID
    if inode is not None:
        pid = index.get(inode, NO_PID) if index is not None else find_pid(inode, cfg)
    exe = process_exe(pid, cfg)
    return ProcessInfo(pid=pid, user=lookup_user(uid), exe=exe, name=process_name(exe))

def resolve_owners(records: List[ConnectionRecord], cfg: Optional[CFG] = None) -> List[ConnectionRecord]:
    """Return copies of `records` with owner and process fields filled in.

    The descriptor tree is walked once for the whole batch.
    """
    if not records:
        return []
    index = build_inode_index(cfg)
    exes: Dict[str, str] = {}
    users: Dict[Optional[str], str] = {}
    out: List[ConnectionRecord] = []
    for rec in records:
        pid = index.get(rec.inode, NO_PID) if rec.inode is not None else NO_PID
        if pid not in exes:
            exes[pid] = process_exe(pid, cfg)
        if rec.uid not in users:
            users[rec.uid] = lookup_user(rec.uid)
        exe = exes[pid]
        out.append(dataclasses.replace(rec, pid=pid, user=users[rec.uid], exe=exe, process_name=process_name(exe)))
    return out

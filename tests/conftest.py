"""Shared fixtures: a throwaway procfs tree under tmp_path."""
from __future__ import annotations

import os
from pathlib import Path

import pytest

from procnet_stat.config import CFG

TCP_HEADER = "  sl  local_address rem_address   st tx_queue rx_queue tr tm->when retrnsmt   uid  timeout inode"
UDP_HEADER = "   sl  local_address rem_address   st tx_queue rx_queue tr tm->when retrnsmt   uid  timeout inode ref pointer drops"

TCP_LINES = [
    "   0: 0100007F:0050 00000000:0000 0A 00000000:00000000 00:00000000 00000000     0        0 12345 1 0000000000000000 100 0 0 10 0",
    "   1: 0100007F:1F90 0100007F:C350 01 00000000:00000000 00:00000000 00000000  1000        0 23456 1 0000000000000000 20 4 30 10 -1",
    "   2: 0100007F:C350 0100007F:1F90 06 00000000:00000000 03:000016A8 00000000  1000        0 0 3 0000000000000000",
]
TCP6_LINES = [
    "   0: 00000000000000000000000001000000:0016 00000000000000000000000000000000:0000 0A 00000000:00000000 00:00000000 00000000     0        0 34567 1 0000000000000000 100 0 0 10 0",
]
UDP_LINES = [
    "  123: 00000000:0044 00000000:0000 07 00000000:00000000 00:00000000 00000000     0        0 45678 2 0000000000000000 0",
    "  456: 0100007F:0035 0100007F:D431 01 00000000:00000000 00:00000000 00000000   101        0 56789 2 0000000000000000 0",
]
UDP6_LINES = [
    "  789: 00000000000000000000000000000000:14E9 00000000000000000000000000000000:0000 07 00000000:00000000 00:00000000 00000000   101        0 67890 2 0000000000000000 0",
]


class FakeProc:
    def __init__(self, root: Path):
        self.root = root
        (root / "net").mkdir(parents=True, exist_ok=True)

    @property
    def cfg(self) -> CFG:
        return CFG(proc_root=self.root)

    def add_table(self, proto: str, lines, header: str = TCP_HEADER) -> Path:
        path = self.root / "net" / proto
        path.write_text("\n".join([header, *lines]) + "\n")
        return path

    def add_process(self, pid: int, exe: str | None = None, fds: dict | None = None) -> Path:
        pid_dir = self.root / str(pid)
        fd_dir = pid_dir / "fd"
        fd_dir.mkdir(parents=True, exist_ok=True)
        for fd, target in (fds or {}).items():
            os.symlink(target, fd_dir / str(fd))
        if exe is not None:
            os.symlink(exe, pid_dir / "exe")
        return pid_dir


@pytest.fixture
def fake_proc(tmp_path) -> FakeProc:
    return FakeProc(tmp_path / "proc")


@pytest.fixture
def populated_proc(fake_proc) -> FakeProc:
    fake_proc.add_table("tcp", TCP_LINES)
    fake_proc.add_table("tcp6", TCP6_LINES)
    fake_proc.add_table("udp", UDP_LINES, header=UDP_HEADER)
    fake_proc.add_table("udp6", UDP6_LINES, header=UDP_HEADER)
    fake_proc.add_process(1, exe="/usr/lib/systemd/systemd", fds={0: "/dev/null", 3: "socket:[45678]"})
    fake_proc.add_process(812, exe="/usr/sbin/nginx", fds={0: "/dev/null", 1: "pipe:[999]", 6: "socket:[12345]"})
    fake_proc.add_process(4242, exe="/usr/bin/python3", fds={3: "socket:[23456]", 4: "anon_inode:[eventpoll]", 7: "socket:[34567]"})
    return fake_proc

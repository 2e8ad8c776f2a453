from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Optional, Tuple

NO_PID = "-"
NO_USER = "-"

@dataclass(frozen=True)
class ProcessInfo:
    pid: str = NO_PID
    user: str = NO_USER
    exe: str = ""
    name: str = ""

@dataclass(frozen=True)
class ConnectionRecord:
    protocol: str  # 'tcp', 'udp', 'tcp6', 'udp6'
    local_address: str
    local_port: int
    remote_address: str
    remote_port: int
    state: str  # 'ESTABLISHED', 'LISTEN', ..., 'unknown', 'NONE' for udp
    uid: Optional[str] = None
    inode: Optional[str] = None
    user: str = NO_USER
    pid: str = NO_PID
    process_name: str = ""
    exe: str = ""

    @property
    def laddr(self) -> Tuple[str, int]:
        return (self.local_address, self.local_port)

    @property
    def raddr(self) -> Tuple[str, int]:
        return (self.remote_address, self.remote_port)

    def to_dict(self) -> dict:
        return asdict(self)

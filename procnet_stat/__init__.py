"""Programmatic netstat for Linux, built on /proc/net and /proc/<pid>/fd."""
from .collectors import netstat, tcp, udp, tcp6, udp6, resolve_owner, resolve_owners
from .config import CFG, SOCKET_STATES, UNKNOWN_STATE, NO_STATE
from .errors import (
    NetstatError, MalformedInput, TruncatedRecord, UnsupportedProtocol, ResourceUnavailable, ConfigError,
)
from .models import ConnectionRecord, ProcessInfo

__version__ = "0.1.0"

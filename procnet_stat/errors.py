from __future__ import annotations


class NetstatError(Exception):
    """Base class for everything procnet_stat raises."""


class MalformedInput(NetstatError, ValueError):
    pass


class TruncatedRecord(MalformedInput):
    """A table line with too few fields to hold an address pair and a state."""


class UnsupportedProtocol(NetstatError, ValueError):
    def __init__(self, protocol):
        super().__init__(f"{protocol!r} is not a valid protocol, expected one of tcp, udp, tcp6, udp6")
        self.protocol = protocol


class ResourceUnavailable(NetstatError, OSError):
    def __init__(self, path, reason: str = ""):
        msg = f"cannot read {path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.path = path


class ConfigError(NetstatError, ValueError):
    pass

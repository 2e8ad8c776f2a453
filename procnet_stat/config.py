from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigError
from .utils.path import to_abs_path

log = logging.getLogger(__name__)

DEFAULT_PROC_ROOT = Path("/proc")

# table file under <proc_root>/net/ per protocol selector
PROTOCOLS = MappingProxyType({
    "tcp": "tcp",
    "udp": "udp",
    "tcp6": "tcp6",
    "udp6": "udp6",
})
FAMILY = MappingProxyType({"tcp": 4, "udp": 4, "tcp6": 6, "udp6": 6})
UDP_PROTOCOLS = frozenset({"udp", "udp6"})

# include/net/tcp_states.h
SOCKET_STATES = MappingProxyType({
    "01": "ESTABLISHED",
    "02": "SYN_SENT",
    "03": "SYN_RECV",
    "04": "FIN_WAIT1",
    "05": "FIN_WAIT2",
    "06": "TIME_WAIT",
    "07": "CLOSE",
    "08": "CLOSE_WAIT",
    "09": "LAST_ACK",
    "0A": "LISTEN",
    "0B": "CLOSING",
})
UNKNOWN_STATE = "unknown"
NO_STATE = "NONE"

OUTPUT_FORMATS = ("table", "json")

def socket_state(code: str) -> str:
    return SOCKET_STATES.get(code.upper(), UNKNOWN_STATE)

@dataclass
class CFG:
    proc_root: Path = DEFAULT_PROC_ROOT
    protocols: List[str] = field(default_factory=lambda: list(PROTOCOLS))
    resolve_owners: bool = False
    output: str = "table"

    def validate(self) -> "CFG":
        bad = [p for p in self.protocols if p not in PROTOCOLS]
        if bad:
            raise ConfigError(f"unsupported protocol(s): {', '.join(map(str, bad))}")
        if self.output not in OUTPUT_FORMATS:
            raise ConfigError(f"output must be one of {', '.join(OUTPUT_FORMATS)}, got {self.output!r}")
        return self

def _split_protocols(value: Any) -> List[str]:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, list) or not all(isinstance(x, str) for x in value):
        raise ConfigError(f"protocols must be a string or a list of strings, got {value!r}")
    protos: Dict[str, None] = {}
    for x in value:
        if x.strip():
            protos[x.strip().lower()] = None
    return list(protos)

def _typed(data: Dict[str, Any], key: str, kind: type, path: Path) -> Any:
    value = data[key]
    if not isinstance(value, kind):
        raise ConfigError(f"{key} in {path} must be {kind.__name__}, got {type(value).__name__}")
    return value

def load_cfg_file(path: Optional[str]) -> CFG:
    cfg = CFG()
    p = to_abs_path(path)
    if not p:
        return cfg
    try:
        txt = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read config {p}: {e}") from e
    try:
        data = yaml.safe_load(txt) if p.suffix in (".yaml", ".yml") else json.loads(txt)
    except (yaml.YAMLError, ValueError) as e:
        raise ConfigError(f"cannot parse config {p}: {e}") from e
    data = data or {}
    if not isinstance(data, dict):
        raise ConfigError(f"config {p} must hold a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(CFG)}
    unknown = sorted(map(str, set(data) - known))
    if unknown:
        raise ConfigError(f"unknown key(s) in {p}: {', '.join(unknown)}")

    if "proc_root" in data:
        cfg.proc_root = to_abs_path(_typed(data, "proc_root", str, p), base=p.parent) or DEFAULT_PROC_ROOT
    if "protocols" in data:
        cfg.protocols = _split_protocols(data["protocols"])
    if "resolve_owners" in data:
        cfg.resolve_owners = _typed(data, "resolve_owners", bool, p)
    if "output" in data:
        cfg.output = _typed(data, "output", str, p)
    log.debug("loaded config from %s", p)
    return cfg.validate()

def init_cfg_from_args(args) -> CFG:
    cfg = load_cfg_file(getattr(args, "config", None))
    if getattr(args, "proc_root", None):
        cfg.proc_root = to_abs_path(args.proc_root)
    protos: List[str] = []
    for item in getattr(args, "proto", None) or []:
        protos.extend(p for p in _split_protocols(item) if p not in protos)
    if protos:
        cfg.protocols = protos
    if getattr(args, "resolve", False):
        cfg.resolve_owners = True
    if getattr(args, "json", False):
        cfg.output = "json"
    return cfg.validate()

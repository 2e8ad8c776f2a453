from __future__ import annotations
from pathlib import Path
from typing import List, Optional

from ..config import CFG, PROTOCOLS
from ..errors import ResourceUnavailable, UnsupportedProtocol

def table_path(protocol: str, cfg: Optional[CFG] = None) -> Path:
    if protocol not in PROTOCOLS:
        raise UnsupportedProtocol(protocol)
    cfg = cfg or CFG()
    return Path(cfg.proc_root) / "net" / PROTOCOLS[protocol]

def read_table(protocol: str, cfg: Optional[CFG] = None) -> List[str]:
    """Return the data lines of /proc/net/<protocol>, header removed."""
    path = table_path(protocol, cfg)
    try:
        data = path.read_text(encoding="ascii", errors="replace")
    except OSError as e:
        raise ResourceUnavailable(path, e.strerror or str(e)) from e

    lines = data.split("\n")[1:]
    # trailing newline leaves an empty last element
    if lines and not lines[-1].strip():
        lines.pop()
    return lines

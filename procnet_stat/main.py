from __future__ import annotations
import argparse, logging, sys
from typing import List, Sequence

import orjson

from .collectors import netstat
from .config import CFG, PROTOCOLS, init_cfg_from_args
from .errors import NetstatError
from .models import ConnectionRecord

def parse_args(argv: Sequence[str] | None = None):
    ap = argparse.ArgumentParser(description='List TCP/UDP sockets from /proc/net, like netstat')
    ap.add_argument('--proto', action='append', default=None,
                    help=f"protocol(s) to show, repeat or comma-separate ({', '.join(PROTOCOLS)}); default all")
    ap.add_argument('--resolve', action='store_true', help='map each socket to its owning process (needs root for other users)')
    ap.add_argument('--json', action='store_true', help='print JSON instead of a table')
    ap.add_argument('--proc-root', type=str, default=None, help='procfs mount point (default /proc)')
    ap.add_argument('--config', type=str, default=None, help='YAML or JSON config file')
    ap.add_argument('--serve', action='store_true', help='serve snapshots over HTTP instead of printing once')
    ap.add_argument('--port', type=int, default=8765)
    ap.add_argument('-v', '--verbose', action='store_true')
    return ap.parse_args(argv)

def _endpoint(addr: str, port: int) -> str:
    return f"[{addr}]:{port}" if ':' in addr else f"{addr}:{port}"

def format_table(records: List[ConnectionRecord]) -> str:
    rows = [("Proto", "Local Address", "Foreign Address", "State", "User", "PID/Program")]
    for r in records:
        prog = f"{r.pid}/{r.process_name}" if r.process_name else r.pid
        rows.append((r.protocol, _endpoint(*r.laddr), _endpoint(*r.raddr), r.state, r.user, prog))
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
    return "\n".join("  ".join(c.ljust(w) for c, w in zip(row, widths)).rstrip() for row in rows)

def snapshot(cfg: CFG) -> List[ConnectionRecord]:
    records: List[ConnectionRecord] = []
    for proto in cfg.protocols:
        records.extend(netstat(proto, cfg))
    return records

def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="[%(levelname)s] %(name)s: %(message)s")
    try:
        cfg = init_cfg_from_args(args)
        if args.serve:
            from .web import create_app
            app = create_app(cfg)
            print(f"[*] Serving on http://localhost:{args.port}")
            app.run(host='0.0.0.0', port=args.port, debug=False, use_reloader=False)
            return 0
        records = snapshot(cfg)
    except NetstatError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 2

    if cfg.output == "json":
        sys.stdout.write(orjson.dumps([r.to_dict() for r in records], option=orjson.OPT_INDENT_2).decode() + "\n")
    else:
        print(format_table(records))
    return 0

if __name__ == '__main__':
    sys.exit(main())

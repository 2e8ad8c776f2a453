from __future__ import annotations
from flask import Flask, Response, current_app, request
import orjson

from ..collectors import netstat
from ..config import CFG, PROTOCOLS
from ..errors import NetstatError, ResourceUnavailable, UnsupportedProtocol

def dumps(obj) -> str:
    return orjson.dumps(obj).decode()

def _json(obj, status: int = 200) -> Response:
    return Response(dumps(obj), status=status, mimetype="application/json")

def _status_for(err: NetstatError) -> int:
    if isinstance(err, UnsupportedProtocol):
        return 400
    if isinstance(err, ResourceUnavailable):
        return 503
    # MalformedInput and anything else: the kernel table did not look like we expect
    return 500

def _flag(value) -> bool:
    return str(value).lower() in ("1", "true", "yes", "on")

def create_app(cfg: CFG) -> Flask:
    app = Flask(__name__)

    @app.errorhandler(NetstatError)
    def handle_netstat_error(err: NetstatError):
        status = _status_for(err)
        current_app.logger.warning("snapshot failed (%d): %s", status, err)
        return _json({"error": type(err).__name__, "message": str(err)}, status)

    @app.get("/api/protocols")
    def api_protocols():
        return _json({"protocols": list(PROTOCOLS), "enabled": cfg.protocols})

    @app.get("/api/connections/<proto>")
    def api_connections(proto: str):
        resolve = cfg.resolve_owners
        if "resolve" in request.args:
            resolve = _flag(request.args.get("resolve"))
        if proto in PROTOCOLS and proto not in cfg.protocols:
            return _json({"error": "ProtocolDisabled", "message": f"{proto} is not enabled"}, 404)
        records = netstat(proto, cfg, resolve=resolve)
        return _json({"protocol": proto, "count": len(records),
                      "connections": [r.to_dict() for r in records]})

    return app

from __future__ import annotations

import argparse
import json
from pathlib import Path

import pytest

from procnet_stat.config import CFG, init_cfg_from_args, load_cfg_file
from procnet_stat.errors import ConfigError


def _args(**kw):
    base = dict(config=None, proc_root=None, proto=None, resolve=False, json=False)
    base.update(kw)
    return argparse.Namespace(**base)


def test_defaults():
    cfg = CFG()
    assert cfg.proc_root == Path("/proc")
    assert cfg.protocols == ["tcp", "udp", "tcp6", "udp6"]
    assert cfg.resolve_owners is False
    assert cfg.output == "table"


def test_no_config_file():
    assert load_cfg_file(None) == CFG()


def test_yaml_config(tmp_path):
    p = tmp_path / "netstat.yaml"
    p.write_text("proc_root: fakeproc\nprotocols: [tcp, udp6]\nresolve_owners: true\noutput: json\n")
    cfg = load_cfg_file(str(p))
    assert cfg.proc_root == (tmp_path / "fakeproc").resolve()
    assert cfg.protocols == ["tcp", "udp6"]
    assert cfg.resolve_owners is True
    assert cfg.output == "json"


def test_json_config(tmp_path):
    p = tmp_path / "netstat.json"
    p.write_text(json.dumps({"protocols": "tcp, tcp6", "proc_root": "/host/proc"}))
    cfg = load_cfg_file(str(p))
    assert cfg.protocols == ["tcp", "tcp6"]
    assert cfg.proc_root == Path("/host/proc")


def test_empty_yaml(tmp_path):
    p = tmp_path / "empty.yml"
    p.write_text("")
    assert load_cfg_file(str(p)) == CFG()


@pytest.mark.parametrize("body", [
    "protocols: [tcp, sctp]\n",
    "output: xml\n",
    "colour: true\n",
    "- tcp\n- udp\n",
    "protocols: [tcp\n",
    "protocols: 5\n",
    "protocols: [tcp, 6]\n",
    "proc_root: 5\n",
    "resolve_owners: \"false\"\n",
    "resolve_owners: 1\n",
    "output: 3\n",
])
def test_bad_yaml_config(tmp_path, body):
    p = tmp_path / "bad.yaml"
    p.write_text(body)
    with pytest.raises(ConfigError):
        load_cfg_file(str(p))


def test_json_string_bool_rejected(tmp_path):
    p = tmp_path / "netstat.json"
    p.write_text(json.dumps({"resolve_owners": "false"}))
    with pytest.raises(ConfigError):
        load_cfg_file(str(p))


def test_config_protocols_deduplicated(tmp_path):
    p = tmp_path / "netstat.yaml"
    p.write_text("protocols: [tcp, TCP, udp, tcp]\n")
    assert load_cfg_file(str(p)).protocols == ["tcp", "udp"]


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError):
        load_cfg_file(str(tmp_path / "nope.yaml"))


def test_args_override_file(tmp_path):
    p = tmp_path / "netstat.yaml"
    p.write_text("protocols: [udp]\n")
    cfg = init_cfg_from_args(_args(config=str(p), proto=["tcp,tcp6", "tcp"], resolve=True, json=True,
                                   proc_root=str(tmp_path)))
    assert cfg.protocols == ["tcp", "tcp6"]
    assert cfg.resolve_owners is True
    assert cfg.output == "json"
    assert cfg.proc_root == tmp_path.resolve()


def test_args_bad_protocol():
    with pytest.raises(ConfigError):
        init_cfg_from_args(_args(proto=["tcp,bogus"]))

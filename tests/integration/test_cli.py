"""
tests/integration/test_cli.py
=============================
Exit codes of scripts/find_path.py: 0 found, 1 not found, 2 error.
"""
import importlib.util
import json
from pathlib import Path

import pytest

from tunnelsat.network.loader import NetworkLoader

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "find_path.py"


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("find_path_script", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def tunnel_file(tunnel_network, tmp_path):
    path = str(tmp_path / "tunnel.json")
    NetworkLoader.to_json(tunnel_network, path)
    return path


# ═══════════════════════════════════════════════════════════════════
#  RESULTS
# ═══════════════════════════════════════════════════════════════════

class TestExitCodes:
    def test_found(self, cli, tunnel_file, capsys):
        assert cli.main([tunnel_file, "--length", "3"]) == 0
        assert "Path of length 3: s -> a -> b -> d" in capsys.readouterr().out

    def test_not_found(self, cli, tunnel_file, capsys):
        assert cli.main([tunnel_file, "--length", "2"]) == 1
        assert "No path of length 2." in capsys.readouterr().out

    def test_shortest(self, cli, tunnel_file):
        assert cli.main([tunnel_file, "--shortest"]) == 0


# ═══════════════════════════════════════════════════════════════════
#  BAD INPUT
# ═══════════════════════════════════════════════════════════════════

class TestBadInput:
    def test_missing_file(self, cli, tmp_path, capsys):
        missing = str(tmp_path / "absent.json")
        assert cli.main([missing, "--length", "1"]) == 2
        assert "Cannot read network file" in capsys.readouterr().err

    def test_top_level_array(self, cli, tmp_path, capsys):
        path = tmp_path / "array.json"
        path.write_text(json.dumps([]))
        assert cli.main([str(path), "--length", "1"]) == 2
        assert "must be an object" in capsys.readouterr().err

    def test_edge_not_an_object(self, cli, tmp_path, capsys):
        path = tmp_path / "edges.json"
        path.write_text(json.dumps({
            "nodes": ["s", "d"], "initial": "s", "final": "d", "edges": ["s->d"],
        }))
        assert cli.main([str(path), "--length", "1"]) == 2
        assert "Edge definition must be an object" in capsys.readouterr().err

    def test_negative_length(self, cli, tunnel_file):
        assert cli.main([tunnel_file, "--length", "-1"]) == 2

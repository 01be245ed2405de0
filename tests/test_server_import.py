import importlib
import sys

from fastapi.testclient import TestClient

import logging_config
from filedrop import server


def test_server_import_has_no_side_effects(monkeypatch):
    called = False

    def fake_setup_logging(*args, **kwargs):
        nonlocal called
        called = True

    monkeypatch.setattr(logging_config, "setup_logging", fake_setup_logging)

    monkeypatch.delitem(sys.modules, "filedrop.server")
    monkeypatch.setattr(sys.modules["filedrop"], "server", server)
    module = importlib.import_module("filedrop.server")

    assert not called
    client = TestClient(module.app)
    assert client.get("/process").status_code == 400
    assert client.post("/").status_code == 400
    assert client.get("/detail").status_code == 500
    assert client.get("/download").status_code == 500
    assert client.get("/no-such-route").status_code == 404


def test_main_applies_cli_overrides(tmp_path, monkeypatch):
    calls = {}

    def fake_run(app, host, port):
        calls.update(app=app, host=host, port=port)

    monkeypatch.setattr(server.uvicorn, "run", fake_run)
    monkeypatch.setattr(server, "setup_logging", lambda *a, **k: None)

    server.main(["--host", "127.0.0.1", "--port", "9100", "--storage-dir", str(tmp_path / "store")])

    assert calls["host"] == "127.0.0.1"
    assert calls["port"] == 9100
    assert calls["app"].state.storage_root == (tmp_path / "store").resolve()

import logging
from logging.handlers import RotatingFileHandler

import pytest

from logging_config import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_writes_to_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "filedrop.log"
    setup_logging("debug", log_file)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h, RotatingFileHandler) for h in root.handlers)

    logging.getLogger("filedrop.test").info("hello from test")
    for handler in root.handlers:
        handler.flush()
    assert "[INFO] filedrop.test: hello from test" in log_file.read_text(encoding="utf-8")


def test_setup_logging_unknown_level_falls_back_to_info(restore_root_logger):
    setup_logging("verbose", None)
    root = logging.getLogger()
    assert root.level == logging.INFO
    assert not any(isinstance(h, RotatingFileHandler) for h in root.handlers)


def test_rejected_path_is_logged(client, storage_dir, caplog):
    with caplog.at_level(logging.WARNING):
        resp = client.get("/download", params={"path": "/etc/passwd"})
    assert resp.status_code == 400
    assert "Rejected path" in caplog.text


def test_storage_error_is_logged(client, storage_dir, caplog):
    with caplog.at_level(logging.ERROR):
        client.get("/download", params={"path": str(storage_dir / "gone.txt")})
    assert "Error processing /download" in caplog.text

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Подключаем исходники
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from config import Settings  # noqa: E402
from filedrop.server import create_app  # noqa: E402


@pytest.fixture
def storage_dir(tmp_path):
    return (tmp_path / "files").resolve()


@pytest.fixture
def make_client(storage_dir):
    """Фабрика клиентов поверх приложения с временным хранилищем."""
    clients = []

    def _make(**overrides):
        overrides.setdefault("storage_dir", str(storage_dir))
        app = create_app(Settings(**overrides))
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()

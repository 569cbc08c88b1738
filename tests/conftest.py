import asyncio
import os

import pytest

# Configura las variables requeridas antes de importar el backend.
os.environ.setdefault("MONGO_URL", "mongodb://localhost:27017/test")
os.environ.setdefault("DB_NAME", "test_db")
os.environ["RATE_LIMIT_ENABLED"] = "false"

from fastapi.testclient import TestClient  # noqa: E402
from mongomock_motor import AsyncMongoMockClient  # noqa: E402

from evaltrack.core import db as db_module  # noqa: E402
from evaltrack.core.config import settings  # noqa: E402
from evaltrack.main import app  # noqa: E402


@pytest.fixture
def mock_db(monkeypatch):
    database = AsyncMongoMockClient()["test_db"]
    monkeypatch.setattr(db_module, "_db", database)
    return database


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "upload_dir", str(tmp_path))
    return tmp_path


@pytest.fixture
def seed(mock_db):
    """Inserta documentos de solicitudes antes de levantar la app (tests síncronos)."""
    def _seed(docs):
        asyncio.run(mock_db.requests.insert_many([dict(d) for d in docs]))
        return docs
    return _seed


@pytest.fixture
def client(mock_db, upload_dir):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def new_request(client):
    def _create(**fields):
        body = {"email": "buyer@example.com", "name": "Buyer", **fields}
        res = client.post("/api/requests", json=body)
        assert res.status_code == 201, res.text
        return res.json()
    return _create

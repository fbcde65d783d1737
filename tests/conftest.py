"""
Shared fixtures: every test gets its own SQLite file and upload directory.
"""

from typing import Callable

import pytest
from fastapi.testclient import TestClient

from backend.core import db
from backend.main import app
from backend.services import photo_service
from backend.services.user_service import create_or_update_user


@pytest.fixture(autouse=True)
def temp_storage(tmp_path, monkeypatch):
    monkeypatch.setattr(db, "_DB_PATH", tmp_path / "app.db")
    monkeypatch.setattr(photo_service, "_UPLOAD_ROOT", tmp_path / "uploads")
    db.init_db()
    return tmp_path


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user() -> Callable[..., dict]:
    """Create a user; arquitectos and clientes also get their directory row."""

    def _make(email: str, rol: str = "cliente", nombre: str = "Nombre", apellido: str = "Apellido") -> dict:
        user = create_or_update_user(email, nombre, apellido, rol)
        table = {"arquitecto": "arquitectos", "cliente": "clientes"}.get(rol)
        if table:
            with db.connect() as conn:
                cur = conn.execute(
                    f"INSERT INTO {table} (usuario_id, nombre, apellido, email) VALUES (?, ?, ?, ?)",
                    (user["id"], nombre, apellido, email),
                )
                user[f"{table}_id"] = cur.lastrowid
        return user

    return _make


@pytest.fixture
def login(client: TestClient) -> Callable[[str], dict]:
    """Sign the test client in as an existing user; returns the session user."""

    def _login(email: str) -> dict:
        response = client.post("/api/auth/signin", json={"email": email, "password": "x"})
        assert response.status_code == 200, response.text
        return response.json()["user"]

    return _login

"""
API tests for sign-in, sign-up, sign-out and /api/user/me.
"""

from fastapi.testclient import TestClient

from backend.core.config import SESSION_COOKIE_NAME
from backend.core.session import decode_session


def test_signin_unknown_email_returns_401(client: TestClient) -> None:
    response = client.post("/api/auth/signin", json={"email": "nadie@example.com", "password": "x"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Credenciales inválidas"


def test_signin_requires_email_and_password(client: TestClient) -> None:
    assert client.post("/api/auth/signin", json={"email": "a@example.com"}).status_code == 422
    assert client.post("/api/auth/signin", json={"email": "", "password": "x"}).status_code == 422


def test_signin_sets_session_cookie_and_redirects_by_role(client: TestClient, make_user) -> None:
    make_user("arq@example.com", rol="arquitecto", nombre="Marcos")
    response = client.post("/api/auth/signin", json={"email": "arq@example.com", "password": "whatever"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["redirectUrl"] == "/dashboard/arquitecto"
    assert body["user"]["rol"] == "arquitecto"
    assert body["user"]["nombre"] == "Marcos"

    session = decode_session(client.cookies.get(SESSION_COOKIE_NAME))
    assert session is not None
    assert session.email == "arq@example.com"
    set_cookie = response.headers["set-cookie"].lower()
    assert "httponly" in set_cookie
    assert "samesite=lax" in set_cookie
    assert "max-age=604800" in set_cookie


def test_me_without_session_returns_401(client: TestClient) -> None:
    response = client.get("/api/user/me")
    assert response.status_code == 401
    assert response.json()["detail"] == "No autenticado"


def test_me_with_tampered_cookie_returns_401(client: TestClient) -> None:
    response = client.get("/api/user/me", headers={"Cookie": f"{SESSION_COOKIE_NAME}=garbage"})
    assert response.status_code == 401


def test_me_returns_session_user(client: TestClient, make_user, login) -> None:
    user = make_user("g@example.com", rol="gestor")
    login("g@example.com")
    response = client.get("/api/user/me")
    assert response.status_code == 200
    assert response.json()["user"]["userId"] == user["id"]


def test_signup_creates_user_and_session(client: TestClient) -> None:
    response = client.post(
        "/api/auth/signup",
        json={"email": "nuevo@example.com", "password": "x", "nombre": "Nuevo"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["redirectUrl"] == "/dashboard/cliente"
    assert body["user"]["rol"] == "cliente"
    assert set(body["user"]) == {"userId", "email", "rol", "nombre", "apellido"}
    assert client.get("/api/user/me").json()["user"]["email"] == "nuevo@example.com"


def test_signup_existing_email_keeps_role_and_updates_names(client: TestClient, make_user) -> None:
    make_user("g@example.com", rol="gestor", nombre="Viejo")
    response = client.post(
        "/api/auth/signup",
        json={"email": "g@example.com", "password": "x", "nombre": "Nuevo", "apellido": "Ap", "rol": "cliente"},
    )
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["rol"] == "gestor"
    assert user["nombre"] == "Nuevo"
    assert response.json()["redirectUrl"] == "/dashboard/gestor"


def test_signout_clears_cookies(client: TestClient, make_user, login) -> None:
    make_user("c@example.com")
    login("c@example.com")
    response = client.post("/api/auth/signout")
    assert response.status_code == 200
    assert response.json() == {"success": True, "redirectUrl": "/auth/signin"}
    assert client.get("/api/user/me").status_code == 401

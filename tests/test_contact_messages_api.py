"""
API tests for /api/contacto and /api/mensajes.
"""

from fastapi.testclient import TestClient


def test_contact_create_requires_session(client: TestClient) -> None:
    response = client.post("/api/contacto", json={"asunto": "Hola", "mensaje": "Consulta"})
    assert response.status_code == 401


def test_contact_create_and_list(client: TestClient, make_user, login) -> None:
    user = make_user("c@example.com", nombre="Carla", apellido="Ruiz")
    login("c@example.com")

    response = client.post("/api/contacto", json={"asunto": "Presupuesto", "mensaje": "¿Cuánto cuesta?"})
    assert response.status_code == 201
    mensaje = response.json()["mensaje"]
    assert mensaje["estado"] == "pendiente"
    assert mensaje["cliente_id"] == user["id"]
    assert mensaje["fecha_respuesta"] is None
    assert mensaje["usuario"] == {"id": user["id"], "nombre": "Carla", "apellido": "Ruiz", "email": "c@example.com"}

    second = client.post("/api/contacto", json={"asunto": "Otra", "mensaje": "Más"}).json()["mensaje"]
    listed = client.get("/api/contacto").json()["mensajes"]
    assert [m["id"] for m in listed] == [second["id"], mensaje["id"]]
    assert listed[0]["usuario_email"] == "c@example.com"


def test_contact_empty_fields_return_422(client: TestClient, make_user, login) -> None:
    make_user("c@example.com")
    login("c@example.com")
    assert client.post("/api/contacto", json={"asunto": "", "mensaje": "x"}).status_code == 422


def test_contact_list_filters(client: TestClient, make_user, login) -> None:
    first = make_user("a@example.com")
    make_user("b@example.com")
    login("a@example.com")
    client.post("/api/contacto", json={"asunto": "A", "mensaje": "a"})
    login("b@example.com")
    other = client.post("/api/contacto", json={"asunto": "B", "mensaje": "b"}).json()["mensaje"]
    client.patch("/api/contacto", json={"id": other["id"], "estado": "en_proceso"})

    own = client.get("/api/contacto", params={"cliente_id": first["id"]}).json()["mensajes"]
    assert [m["asunto"] for m in own] == ["A"]
    in_progress = client.get("/api/contacto", params={"estado": "en_proceso"}).json()["mensajes"]
    assert [m["asunto"] for m in in_progress] == ["B"]


def test_contact_state_changes(client: TestClient, make_user, login) -> None:
    make_user("c@example.com")
    login("c@example.com")
    mensaje = client.post("/api/contacto", json={"asunto": "A", "mensaje": "a"}).json()["mensaje"]

    in_progress = client.patch("/api/contacto", json={"id": mensaje["id"], "estado": "en_proceso"})
    assert in_progress.status_code == 200
    assert in_progress.json()["mensaje"]["fecha_respuesta"] is None

    answered = client.patch("/api/contacto", json={"id": mensaje["id"], "estado": "respondido"})
    assert answered.json()["mensaje"]["estado"] == "respondido"
    assert answered.json()["mensaje"]["fecha_respuesta"] is not None


def test_contact_state_validation(client: TestClient, make_user, login) -> None:
    assert client.patch("/api/contacto", json={"id": 1, "estado": "respondido"}).status_code == 401
    make_user("c@example.com")
    login("c@example.com")
    mensaje = client.post("/api/contacto", json={"asunto": "A", "mensaje": "a"}).json()["mensaje"]
    assert client.patch("/api/contacto", json={"id": mensaje["id"], "estado": "olvidado"}).status_code == 400
    assert client.patch("/api/contacto", json={"id": 999, "estado": "respondido"}).status_code == 404
    assert client.patch("/api/contacto", json={"id": 0, "estado": "respondido"}).status_code == 422


def test_messages_create_and_filter(client: TestClient, make_user) -> None:
    ana = make_user("ana@example.com", nombre="Ana")
    beto = make_user("beto@example.com", nombre="Beto")

    response = client.post(
        "/api/mensajes",
        json={"remitente_id": ana["id"], "destinatario_id": beto["id"], "asunto": "Visita", "contenido": "Mañana a las 10"},
    )
    assert response.status_code == 201
    mensaje = response.json()["mensaje"]
    assert mensaje["leido"] is False
    client.post(
        "/api/mensajes",
        json={"remitente_id": beto["id"], "destinatario_id": ana["id"], "asunto": "Re: Visita", "contenido": "Perfecto"},
    )

    to_beto = client.get("/api/mensajes", params={"destinatario_id": beto["id"]}).json()["mensajes"]
    assert [m["asunto"] for m in to_beto] == ["Visita"]
    assert to_beto[0]["remitente_nombre"] == "Ana"
    assert to_beto[0]["destinatario_email"] == "beto@example.com"

    everything = client.get("/api/mensajes").json()["mensajes"]
    assert [m["asunto"] for m in everything] == ["Re: Visita", "Visita"]
    assert client.get("/api/mensajes", params={"leido": "true"}).json()["mensajes"] == []
    assert len(client.get("/api/mensajes", params={"leido": "false"}).json()["mensajes"]) == 2


def test_messages_unknown_user_returns_400(client: TestClient, make_user) -> None:
    ana = make_user("ana@example.com")
    response = client.post(
        "/api/mensajes",
        json={"remitente_id": ana["id"], "destinatario_id": 999, "asunto": "x", "contenido": "y"},
    )
    assert response.status_code == 400


def test_messages_missing_fields_return_422(client: TestClient) -> None:
    assert client.post("/api/mensajes", json={"remitente_id": 1}).status_code == 422

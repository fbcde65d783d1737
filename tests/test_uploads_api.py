"""
API tests for /api/upload and /api/upload-photo. Files land in the per-test upload directory.
"""

from fastapi.testclient import TestClient

from backend.core.config import MAX_UPLOAD_BYTES
from backend.services import photo_service

_JPEG = b"\xff\xd8\xff\xe0fake-jpeg"


def _stored(url: str):
    assert url.startswith("/uploads/")
    return photo_service.upload_root() / url.removeprefix("/uploads/")


def test_upload_requires_session(client: TestClient) -> None:
    response = client.post("/api/upload", files=[("files", ("a.jpg", _JPEG, "image/jpeg"))])
    assert response.status_code == 401


def test_upload_stores_files_in_order(client: TestClient, make_user, login) -> None:
    make_user("c@example.com")
    login("c@example.com")
    response = client.post(
        "/api/upload",
        files=[
            ("files", ("fachada principal.jpg", _JPEG, "image/jpeg")),
            ("files", ("../../tejado.png", b"png-bytes", "image/png")),
        ],
    )
    assert response.status_code == 200
    urls = response.json()["urls"]
    assert len(urls) == 2
    assert urls[0].startswith("/uploads/uploads/")
    assert "fachada_principal-" in urls[0]
    assert urls[0].endswith(".jpg")
    assert "tejado-" in urls[1]
    assert ".." not in urls[1]
    assert _stored(urls[0]).read_bytes() == _JPEG
    assert _stored(urls[1]).read_bytes() == b"png-bytes"


def test_upload_without_files_returns_400(client: TestClient, make_user, login) -> None:
    make_user("c@example.com")
    login("c@example.com")
    response = client.post("/api/upload")
    assert response.status_code == 400
    assert response.json()["detail"] == "No se recibieron archivos"


def test_upload_rejects_non_images_and_writes_nothing(client: TestClient, make_user, login) -> None:
    make_user("c@example.com")
    login("c@example.com")
    response = client.post(
        "/api/upload",
        files=[
            ("files", ("ok.jpg", _JPEG, "image/jpeg")),
            ("files", ("notas.pdf", b"%PDF", "application/pdf")),
        ],
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Tipo no permitido: application/pdf"
    assert not (photo_service.upload_root() / "uploads").exists()


def test_upload_rejects_oversize(client: TestClient, make_user, login) -> None:
    make_user("c@example.com")
    login("c@example.com")
    response = client.post(
        "/api/upload",
        files=[("files", ("big.jpg", b"x" * (MAX_UPLOAD_BYTES + 1), "image/jpeg"))],
    )
    assert response.status_code == 413
    assert response.json()["detail"] == "Las imágenes deben ser menores a 5MB"


def test_upload_photo_raw_body(client: TestClient) -> None:
    response = client.post(
        "/api/upload-photo",
        content=_JPEG,
        headers={"X-Filename": "bano.PNG", "Content-Type": "image/png"},
    )
    assert response.status_code == 200
    url = response.json()["url"]
    assert url.startswith("/uploads/informes/")
    assert url.endswith(".png")
    assert _stored(url).read_bytes() == _JPEG


def test_upload_photo_defaults_to_jpeg(client: TestClient) -> None:
    response = client.post("/api/upload-photo", content=_JPEG)
    assert response.status_code == 200
    assert response.json()["url"].endswith(".jpg")


def test_upload_photo_rejects_non_image(client: TestClient) -> None:
    response = client.post("/api/upload-photo", content=b"hola", headers={"Content-Type": "text/plain"})
    assert response.status_code == 400

"""
API handlers: read request data (UploadFile, raw bodies), call services, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Marshalling and exception-to-HTTP mapping.
Lives in the API layer so services stay free of FastAPI/HTTP types.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException, Request, UploadFile

from backend.core.errors import (
    ConflictError,
    InvalidRequestError,
    InvalidUploadError,
    NotFoundError,
    PermissionDeniedError,
    QuotaExceededError,
    ServiceUnavailableError,
)
from backend.schemas.upload import PhotoUploadResponse, UploadResponse
from backend.services.photo_service import save_photos, save_report_photo

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[Exception], int] = {
    InvalidRequestError: 400,
    PermissionDeniedError: 403,
    NotFoundError: 404,
    ConflictError: 409,
    QuotaExceededError: 429,
    ServiceUnavailableError: 503,
}


@contextmanager
def http_errors(failure_detail: str) -> Iterator[None]:
    """
    Map service errors raised inside the block to HTTPException.

    Known domain errors keep their message; anything unexpected is logged and
    surfaces as 500 with failure_detail.
    """
    try:
        yield
    except HTTPException:
        raise
    except InvalidUploadError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except tuple(_STATUS_BY_ERROR) as e:
        raise HTTPException(status_code=_STATUS_BY_ERROR[type(e)], detail=e.message) from e
    except Exception as e:
        logger.exception("[handlers] %s", failure_detail)
        raise HTTPException(status_code=500, detail=failure_detail) from e


async def handle_photo_upload(files: list[UploadFile]) -> UploadResponse:
    """Read uploaded files and store them; 400 for no files or non-images, 413 for oversize."""
    if not files:
        raise HTTPException(status_code=400, detail="No se recibieron archivos")

    items: list[tuple[str, str | None, bytes]] = []
    for upload in files:
        content = await upload.read()
        items.append((upload.filename or "", upload.content_type, content))

    with http_errors("Fallo al subir archivos"):
        urls = save_photos(items)
    return UploadResponse(urls=urls)


async def handle_report_photo(request: Request) -> PhotoUploadResponse:
    """Store a raw-body photo named by X-Filename with type from Content-Type."""
    content = await request.body()
    filename = request.headers.get("x-filename") or "photo.jpg"
    content_type = request.headers.get("content-type") or "image/jpeg"
    with http_errors("Error al subir la foto"):
        url = save_report_photo(filename, content_type, content)
    return PhotoUploadResponse(url=url)

"""
Photo storage: validate uploaded images and persist them under data/uploads/.

Responsibility: naming, validation and writing to disk. Files are served read-only
under PUBLIC_UPLOAD_PREFIX, so each stored key maps to a public URL. No HTTP here.
"""

import logging
import re
import secrets
import time
from pathlib import Path

from backend.core.config import MAX_UPLOAD_BYTES, PUBLIC_UPLOAD_PREFIX, UPLOAD_DIR_NAME
from backend.core.errors import InvalidUploadError

logger = logging.getLogger(__name__)

# Project root
_ROOT = Path(__file__).resolve().parent.parent.parent
_UPLOAD_ROOT = _ROOT / UPLOAD_DIR_NAME


def upload_root() -> Path:
    return _UPLOAD_ROOT


def _sanitize_filename(filename: str) -> str:
    """Basename with anything outside [A-Za-z0-9_.-] collapsed to '_'."""
    base = Path(filename or "").name
    safe = re.sub(r"[^\w.\-]+", "_", base).strip("._")
    return safe or "imagen"


def _validate_image(content_type: str | None, size: int) -> None:
    if not (content_type or "").startswith("image/"):
        raise InvalidUploadError(f"Tipo no permitido: {content_type or 'desconocido'}")
    if size > MAX_UPLOAD_BYTES:
        raise InvalidUploadError("Las imágenes deben ser menores a 5MB", status_code=413)


def _write(key: str, content: bytes) -> str:
    """Write content at key (relative to the upload root) and return its public URL."""
    root = _UPLOAD_ROOT.resolve()
    dest = (root / key).resolve()
    if not str(dest).startswith(str(root)):
        raise InvalidUploadError(f"Nombre de archivo no permitido: {key}")
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_bytes(content)
    return f"{PUBLIC_UPLOAD_PREFIX}/{key}"


def save_photos(items: list[tuple[str, str | None, bytes]]) -> list[str]:
    """
    Validate and store a batch of photos.

    Args:
        items: (filename, content_type, raw_bytes) for each file.

    Returns:
        Public URLs, in input order.

    Raises:
        InvalidUploadError: no files, a non-image file (400) or a file over 5 MiB (413).
            Nothing is written when any file is rejected.
        OSError: writing a file fails.
    """
    if not items:
        raise InvalidUploadError("No se recibieron archivos")
    for _, content_type, content in items:
        _validate_image(content_type, len(content))

    urls: list[str] = []
    for filename, _, content in items:
        safe = _sanitize_filename(filename)
        stem, suffix = Path(safe).stem, Path(safe).suffix
        key = f"uploads/{int(time.time() * 1000)}-{stem}-{secrets.token_hex(4)}{suffix}"
        urls.append(_write(key, content))
    logger.info("[photo_service:save_photos] OUT files=%d", len(urls))
    return urls


def save_report_photo(filename: str | None, content_type: str | None, content: bytes) -> str:
    """Store a single report photo as informes/<ms>-<random>.<ext>; returns its public URL."""
    filename = filename or "photo.jpg"
    content_type = content_type or "image/jpeg"
    _validate_image(content_type, len(content))
    extension = re.sub(r"[^A-Za-z0-9]", "", filename.rsplit(".", 1)[-1]) or "jpg"
    key = f"informes/{int(time.time() * 1000)}-{secrets.token_hex(4)}.{extension.lower()}"
    url = _write(key, content)
    logger.info("[photo_service:save_report_photo] OUT bytes=%d ext=%s", len(content), extension)
    return url

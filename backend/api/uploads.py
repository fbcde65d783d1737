"""
Photo upload routes.
"""

from fastapi import APIRouter, Depends, File, Request, UploadFile

from backend.api.deps import require_session
from backend.api.handlers import handle_photo_upload, handle_report_photo
from backend.core.session import SessionData
from backend.schemas.upload import PhotoUploadResponse, UploadResponse

router = APIRouter(tags=["uploads"])


@router.post(
    "/upload",
    response_model=UploadResponse,
    summary="Upload one or more photos",
    description="Multipart field `files`, repeated. Images only, up to 5 MiB each. 400 for other types, 413 when too large.",
)
async def upload_photos(
    files: list[UploadFile] | None = File(None, description="One or more image files."),
    session: SessionData = Depends(require_session),
) -> UploadResponse:
    return await handle_photo_upload(files or [])


@router.post(
    "/upload-photo",
    response_model=PhotoUploadResponse,
    summary="Upload a single report photo as the raw request body",
    description="Filename from X-Filename (default photo.jpg), type from Content-Type (default image/jpeg).",
)
async def upload_report_photo(request: Request) -> PhotoUploadResponse:
    return await handle_report_photo(request)

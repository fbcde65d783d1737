"""Schemas for the photo upload endpoints."""

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """Response after storing one or more photos."""

    urls: list[str] = Field(..., description="Public URLs, e.g. /uploads/uploads/1718000000000-fachada-1a2b3c4d.jpg")

    model_config = {
        "json_schema_extra": {
            "examples": [{"urls": ["/uploads/uploads/1718000000000-fachada-1a2b3c4d.jpg"]}]
        }
    }


class PhotoUploadResponse(BaseModel):
    url: str

"""Schemas for contact requests."""

from pydantic import BaseModel, Field


class ContactCreateRequest(BaseModel):
    asunto: str = Field(..., min_length=1)
    mensaje: str = Field(..., min_length=1)


class ContactStateRequest(BaseModel):
    """Request body for PATCH /api/contacto."""

    id: int = Field(..., gt=0)
    estado: str = Field(..., min_length=1, description="pendiente | respondido | en_proceso | rechazado")

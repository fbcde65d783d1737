"""Schemas for internal messages."""

from pydantic import BaseModel, Field


class MessageCreateRequest(BaseModel):
    remitente_id: int = Field(..., gt=0)
    destinatario_id: int = Field(..., gt=0)
    asunto: str = Field(..., min_length=1)
    contenido: str = Field(..., min_length=1)

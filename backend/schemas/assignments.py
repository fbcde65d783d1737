"""Schemas for architect assignments."""

from pydantic import BaseModel, Field


class AssignmentCreateRequest(BaseModel):
    """Request body for POST /api/asignaciones (gestor only)."""

    cliente_id: int = Field(..., gt=0, description="usuarios.id of the client.")
    arquitecto_id: int = Field(..., gt=0, description="arquitectos.id of the architect.")
    notas: str | None = None


class AssignmentUpdateRequest(BaseModel):
    """Request body for PATCH /api/asignaciones/{id}. Omitted fields are left unchanged."""

    estado: str | None = Field(None, description="pendiente | aceptada | rechazada")
    notas: str | None = None

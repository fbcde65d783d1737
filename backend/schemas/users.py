"""Schemas for user accounts."""

from pydantic import BaseModel, Field


class UserCreateRequest(BaseModel):
    """Request body for POST /api/usuarios."""

    nombre: str = Field(..., min_length=1)
    apellido: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    rol: str = Field(..., description="cliente | arquitecto | gestor")
    telefono: str | None = None

"""Schemas for inspection reports. Section payloads stay free-form dicts keyed by column name."""

from typing import Any

from pydantic import BaseModel, Field


class ReportCreateRequest(BaseModel):
    """Request body for POST /api/informes."""

    tipo: str | None = Field(None, description="basico | tecnico | documental")
    data: dict[str, Any] = Field(default_factory=dict, description="Section payloads keyed by table name.")
    clienteId: Any = None
    asignacionId: Any = None
    arquitectoId: Any = None
    estado_aprobacion: str | None = None


class ReportCreateResponse(BaseModel):
    success: bool = True
    informeId: int


class ApprovalRequest(BaseModel):
    """Request body for PATCH /api/informes/{id}."""

    estado_aprobacion: Any = None

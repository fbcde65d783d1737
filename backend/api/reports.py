"""
Inspection report routes.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Path

from backend.api.deps import require_gestor, require_session
from backend.api.handlers import http_errors
from backend.core.session import SessionData
from backend.schemas.reports import ApprovalRequest, ReportCreateRequest, ReportCreateResponse
from backend.services.report_service import (
    create_report,
    delete_report,
    get_report,
    list_reports,
    set_approval,
    update_report,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["reports"])


@router.get("/informes", summary="Reports visible to the caller's role")
def get_reports(
    cliente_id: int | None = None,
    arquitecto_id: int | None = None,
    estado_aprobacion: str | None = None,
    session: SessionData = Depends(require_session),
) -> dict:
    with http_errors("Error al obtener informes"):
        informes = list_reports(
            session.rol,
            session.userId,
            email=session.email,
            cliente_id=cliente_id,
            arquitecto_id=arquitecto_id,
            estado_aprobacion=estado_aprobacion,
        )
    return {"informes": informes}


@router.post(
    "/informes",
    status_code=201,
    response_model=ReportCreateResponse,
    summary="Create a report with its property and sections",
)
def post_report(body: ReportCreateRequest, session: SessionData = Depends(require_session)) -> ReportCreateResponse:
    logger.info("[api:post_report] IN  tipo=%s rol=%s", body.tipo, session.rol)
    with http_errors("Error al crear informe"):
        informe_id = create_report(
            session.rol,
            session.userId,
            body.tipo,
            body.data,
            email=session.email,
            cliente_id=body.clienteId,
            asignacion_id=body.asignacionId,
            arquitecto_id=body.arquitectoId,
            estado_aprobacion=body.estado_aprobacion,
        )
    return ReportCreateResponse(informeId=informe_id)


@router.get("/informes/{report_id}", summary="Full report document")
def get_report_detail(report_id: int = Path(..., gt=0), session: SessionData = Depends(require_session)) -> dict:
    with http_errors("Error al obtener informe"):
        document = get_report(report_id)
    if document is None:
        raise HTTPException(status_code=404, detail="Informe no encontrado")
    return document


@router.put("/informes/{report_id}", summary="Update report sections")
def put_report(
    report_id: int = Path(..., gt=0),
    data: dict[str, Any] = Body(...),
    session: SessionData = Depends(require_session),
) -> dict:
    logger.info("[api:put_report] IN  id=%s rol=%s keys=%d", report_id, session.rol, len(data))
    with http_errors("Error al actualizar informe"):
        update_report(report_id, session.rol, data)
    return {"success": True}


@router.patch("/informes/{report_id}", summary="Set approval state (gestor)")
def patch_report_approval(
    body: ApprovalRequest,
    report_id: int = Path(..., gt=0),
    session: SessionData = Depends(require_gestor),
) -> dict:
    with http_errors("Error al actualizar estado de aprobación"):
        estado = set_approval(report_id, body.estado_aprobacion)
    return {"ok": True, "estado_aprobacion": estado}


@router.delete("/informes/{report_id}", summary="Delete a report, its sections and property")
def delete_report_route(report_id: int = Path(..., gt=0), session: SessionData = Depends(require_session)) -> dict:
    logger.info("[api:delete_report] IN  id=%s rol=%s", report_id, session.rol)
    with http_errors("Error al eliminar informe"):
        delete_report(report_id)
    return {"success": True, "message": "Informe eliminado correctamente"}

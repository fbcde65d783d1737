"""
Assignment routes: managers assign, architects see and answer their own.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path

from backend.api.deps import require_session
from backend.api.handlers import http_errors
from backend.core.session import SessionData
from backend.schemas.assignments import AssignmentCreateRequest, AssignmentUpdateRequest
from backend.services.assignment_service import create_assignment, list_assignments, update_assignment
from backend.services.directory_service import find_architect_id

logger = logging.getLogger(__name__)
router = APIRouter(tags=["assignments"])


@router.get("/asignaciones", summary="Assignments visible to the caller")
def get_assignments(session: SessionData = Depends(require_session)) -> dict:
    logger.info("[api:get_assignments] IN  user_id=%s rol=%s", session.userId, session.rol)
    with http_errors("Error al obtener asignaciones"):
        if session.rol == "gestor":
            asignaciones = list_assignments()
        else:
            arquitecto_id = find_architect_id(session.userId, session.email)
            asignaciones = [] if arquitecto_id is None else list_assignments(arquitecto_id)
    return {"asignaciones": asignaciones}


@router.post("/asignaciones", status_code=201, summary="Assign a client to an architect (gestor)")
def post_assignment(body: AssignmentCreateRequest, session: SessionData = Depends(require_session)) -> dict:
    if session.rol != "gestor":
        raise HTTPException(status_code=403, detail="No autorizado")
    with http_errors("Error al crear asignación"):
        asignacion = create_assignment(body.cliente_id, body.arquitecto_id, body.notas)
    return {"asignacion": asignacion}


@router.patch("/asignaciones/{assignment_id}", summary="Update state and/or notes")
def patch_assignment(
    body: AssignmentUpdateRequest,
    assignment_id: int = Path(..., gt=0),
    session: SessionData = Depends(require_session),
) -> dict:
    logger.info("[api:patch_assignment] IN  id=%s rol=%s", assignment_id, session.rol)
    with http_errors("Error al actualizar asignación"):
        asignacion = update_assignment(assignment_id, body.estado, body.notas)
    return {"asignacion": asignacion}

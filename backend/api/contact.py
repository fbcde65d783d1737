"""
Contact request routes.
"""

from fastapi import APIRouter, Depends

from backend.api.deps import require_session
from backend.api.handlers import http_errors
from backend.core.session import SessionData
from backend.schemas.contact import ContactCreateRequest, ContactStateRequest
from backend.services.contact_service import (
    create_contact_message,
    list_contact_messages,
    update_contact_state,
)

router = APIRouter(tags=["contact"])


@router.get("/contacto", summary="List contact requests")
def get_contact_messages(cliente_id: int | None = None, estado: str | None = None) -> dict:
    with http_errors("Error al obtener mensajes"):
        mensajes = list_contact_messages(cliente_id, estado)
    return {"mensajes": mensajes}


@router.post("/contacto", status_code=201, summary="Send a contact request as the signed-in user")
def post_contact_message(body: ContactCreateRequest, session: SessionData = Depends(require_session)) -> dict:
    with http_errors("Error al crear mensaje"):
        mensaje = create_contact_message(session.userId, body.asunto, body.mensaje)
    return {"mensaje": mensaje}


@router.patch("/contacto", summary="Change the state of a contact request")
def patch_contact_message(body: ContactStateRequest, session: SessionData = Depends(require_session)) -> dict:
    with http_errors("Error al actualizar mensaje"):
        mensaje = update_contact_state(body.id, body.estado)
    return {"mensaje": mensaje}

"""
Internal message routes.
"""

from fastapi import APIRouter

from backend.api.handlers import http_errors
from backend.schemas.messages import MessageCreateRequest
from backend.services.message_service import create_message, list_messages

router = APIRouter(tags=["messages"])


@router.get("/mensajes", summary="List messages by sender, recipient and read flag")
def get_messages(
    remitente_id: int | None = None,
    destinatario_id: int | None = None,
    leido: str | None = None,
) -> dict:
    read = None if leido is None else leido == "true"
    with http_errors("Error al obtener mensajes"):
        mensajes = list_messages(remitente_id, destinatario_id, read)
    return {"mensajes": mensajes}


@router.post("/mensajes", status_code=201, summary="Send a message")
def post_message(body: MessageCreateRequest) -> dict:
    with http_errors("Error al crear mensaje"):
        mensaje = create_message(body.remitente_id, body.destinatario_id, body.asunto, body.contenido)
    return {"mensaje": mensaje}

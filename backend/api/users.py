"""
User account routes.
"""

import logging

from fastapi import APIRouter

from backend.api.handlers import http_errors
from backend.schemas.users import UserCreateRequest
from backend.services.user_service import create_user, list_users

logger = logging.getLogger(__name__)
router = APIRouter(tags=["users"])


@router.get("/usuarios", summary="List users, optionally by role and active flag")
def get_users(rol: str | None = None, activo: str | None = None) -> dict:
    active = None if activo is None else activo == "true"
    with http_errors("Error al obtener usuarios"):
        usuarios = list_users(rol=rol, activo=active)
    return {"usuarios": usuarios}


@router.post("/usuarios", status_code=201, summary="Create a user")
def post_user(body: UserCreateRequest) -> dict:
    logger.info("[api:post_user] IN  rol=%s", body.rol)
    with http_errors("Error al crear usuario"):
        usuario = create_user(body.nombre, body.apellido, body.email, body.rol, body.telefono)
    return {"usuario": usuario}

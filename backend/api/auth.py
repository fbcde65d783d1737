"""
Auth routes: sign in, sign up, sign out and the current user.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from backend.api.deps import require_session
from backend.api.handlers import http_errors
from backend.core.session import SessionData, create_session, destroy_session
from backend.schemas.auth import AuthResponse, SignInRequest, SignUpRequest
from backend.services.user_service import create_or_update_user, dashboard_path

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])


@router.post("/auth/signin", response_model=AuthResponse, summary="Sign in with email")
def signin(body: SignInRequest, response: Response) -> AuthResponse:
    logger.info("[api:signin] IN")
    with http_errors("Error al iniciar sesión"):
        session = create_session(response, body.email)
    if session is None:
        raise HTTPException(status_code=401, detail="Credenciales inválidas")
    logger.info("[api:signin] OUT user_id=%s rol=%s", session.userId, session.rol)
    return AuthResponse(redirectUrl=dashboard_path(session.rol), user=session.model_dump())


@router.post("/auth/signup", response_model=AuthResponse, summary="Register (or refresh) a user and sign in")
def signup(body: SignUpRequest, response: Response) -> AuthResponse:
    logger.info("[api:signup] IN  rol=%s", body.rol)
    with http_errors("Error al registrar usuario"):
        create_or_update_user(body.email, body.nombre, body.apellido, body.rol)
        session = create_session(response, body.email)
    if session is None:
        raise HTTPException(status_code=500, detail="Error al registrar usuario")
    return AuthResponse(redirectUrl=dashboard_path(session.rol), user=session.model_dump())


@router.post("/auth/signout", summary="Clear the session cookies")
def signout(response: Response) -> dict:
    destroy_session(response)
    return {"success": True, "redirectUrl": "/auth/signin"}


@router.get("/user/me", summary="Current user from the session cookie")
def me(session: SessionData = Depends(require_session)) -> dict:
    return {"user": session.model_dump()}

"""
Cookie session: the signed-in user's identity stored client-side.

The cookie value is the JSON session payload, URL-safe base64 encoded so it survives
cookie quoting. It is not signed; every request decodes it again.
"""

import base64
import binascii
import json
import logging

from fastapi import Request, Response
from pydantic import BaseModel, ValidationError

from backend.core.config import COOKIE_SECURE, ROLE_COOKIE_NAME, SESSION_COOKIE_NAME, SESSION_MAX_AGE
from backend.services.user_service import get_user_by_email

logger = logging.getLogger(__name__)


class SessionData(BaseModel):
    userId: int
    email: str
    rol: str
    nombre: str
    apellido: str = ""


def encode_session(data: SessionData) -> str:
    raw = json.dumps(data.model_dump(), ensure_ascii=False).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


def decode_session(value: str | None) -> SessionData | None:
    """Return the session stored in a cookie value, or None when it is missing or malformed."""
    if not value:
        return None
    try:
        raw = base64.urlsafe_b64decode(value.encode("ascii"))
        return SessionData.model_validate(json.loads(raw))
    except (binascii.Error, UnicodeError, ValueError, ValidationError) as e:
        logger.warning("[session:decode_session] invalid session cookie: %s", type(e).__name__)
        return None


def set_session_cookie(response: Response, data: SessionData) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=encode_session(data),
        max_age=SESSION_MAX_AGE,
        path="/",
        httponly=True,
        samesite="lax",
        secure=COOKIE_SECURE,
    )


def create_session(response: Response, email: str) -> SessionData | None:
    """Look the user up by email and set the session cookie. None when the user does not exist."""
    user = get_user_by_email(email)
    if not user:
        logger.info("[session:create_session] OUT no user for email")
        return None
    data = SessionData(
        userId=user["id"],
        email=user["email"],
        rol=user["rol"],
        nombre=user["nombre"],
        apellido=user.get("apellido") or "",
    )
    set_session_cookie(response, data)
    logger.info("[session:create_session] OUT user_id=%s rol=%s", data.userId, data.rol)
    return data


def get_session(request: Request) -> SessionData | None:
    return decode_session(request.cookies.get(SESSION_COOKIE_NAME))


def destroy_session(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")
    response.delete_cookie(ROLE_COOKIE_NAME, path="/")

"""
Request dependencies: the cookie session and role checks.
"""

from fastapi import Depends, HTTPException, Request

from backend.core.session import SessionData, get_session


def optional_session(request: Request) -> SessionData | None:
    return get_session(request)


def require_session(session: SessionData | None = Depends(optional_session)) -> SessionData:
    if session is None:
        raise HTTPException(status_code=401, detail="No autenticado")
    return session


def require_gestor(session: SessionData | None = Depends(optional_session)) -> SessionData:
    """Only managers pass; anonymous callers get 403 like any other role."""
    if session is None or session.rol != "gestor":
        raise HTTPException(status_code=403, detail="No autorizado")
    return session

"""
User accounts (usuarios): lookup, sign-up upsert, listing and creation by a manager.

Called by the session layer and the API layer; no HTTP or FastAPI here.
"""

import logging
from typing import Any

from backend.core.config import DASHBOARD_PATHS, USER_ROLES
from backend.core.db import connect, row_to_dict, rows_to_dicts, utc_now
from backend.core.errors import ConflictError, InvalidRequestError

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, email, nombre, apellido, rol, telefono, activo, fecha_registro, updated_at"


def dashboard_path(rol: str | None) -> str:
    """Dashboard for a role; unknown roles land on the client dashboard."""
    return DASHBOARD_PATHS.get(rol or "", DASHBOARD_PATHS["cliente"])


def get_user_by_email(email: str) -> dict[str, Any] | None:
    with connect() as conn:
        row = conn.execute(
            f"SELECT {_USER_COLUMNS} FROM usuarios WHERE email = ?", (email,)
        ).fetchone()
    return row_to_dict(row)


def create_or_update_user(email: str, nombre: str, apellido: str = "", rol: str = "cliente") -> dict[str, Any]:
    """
    Insert the user, or refresh nombre/apellido if the email already exists.

    The stored role of an existing user is never changed here.
    """
    if rol not in USER_ROLES:
        raise InvalidRequestError("rol debe ser 'gestor', 'arquitecto' o 'cliente'")
    now = utc_now()
    with connect() as conn:
        conn.execute(
            """
            INSERT INTO usuarios (email, nombre, apellido, rol, fecha_registro, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(email) DO UPDATE SET
                nombre = excluded.nombre,
                apellido = excluded.apellido,
                updated_at = excluded.updated_at
            """,
            (email, nombre, apellido or "", rol, now, now),
        )
        row = conn.execute(f"SELECT {_USER_COLUMNS} FROM usuarios WHERE email = ?", (email,)).fetchone()
    user = dict(row)
    logger.info("[user_service:create_or_update_user] OUT user_id=%s rol=%s", user["id"], user["rol"])
    return user


def list_users(rol: str | None = None, activo: bool | None = None) -> list[dict[str, Any]]:
    clauses: list[str] = []
    params: list[Any] = []
    if rol:
        clauses.append("rol = ?")
        params.append(rol)
    if activo is not None:
        clauses.append("activo = ?")
        params.append(activo)
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    with connect() as conn:
        rows = conn.execute(
            f"SELECT {_USER_COLUMNS} FROM usuarios {where} ORDER BY apellido, nombre", params
        ).fetchall()
    users = rows_to_dicts(rows)
    logger.info("[user_service:list_users] IN  rol=%s activo=%s OUT count=%d", rol, activo, len(users))
    return users


def create_user(
    nombre: str,
    apellido: str,
    email: str,
    rol: str,
    telefono: str | None = None,
) -> dict[str, Any]:
    """
    Create a user account.

    Raises:
        InvalidRequestError: unknown role.
        ConflictError: the email is already registered.
    """
    if rol not in USER_ROLES:
        raise InvalidRequestError("rol debe ser 'gestor', 'arquitecto' o 'cliente'")
    now = utc_now()
    with connect() as conn:
        existing = conn.execute("SELECT id FROM usuarios WHERE email = ?", (email,)).fetchone()
        if existing:
            raise ConflictError("Ya existe un usuario con ese email")
        cur = conn.execute(
            """
            INSERT INTO usuarios (nombre, apellido, email, rol, telefono, activo, fecha_registro, updated_at)
            VALUES (?, ?, ?, ?, ?, 1, ?, ?)
            """,
            (nombre, apellido, email, rol, telefono, now, now),
        )
        row = conn.execute(f"SELECT {_USER_COLUMNS} FROM usuarios WHERE id = ?", (cur.lastrowid,)).fetchone()
    logger.info("[user_service:create_user] OUT user_id=%s rol=%s", row["id"], rol)
    return dict(row)

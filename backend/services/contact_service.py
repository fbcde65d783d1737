"""
Contact requests (contacto) sent by signed-in users to the office.
"""

import logging
from typing import Any

from backend.core.db import connect, row_to_dict, rows_to_dicts, utc_now
from backend.core.errors import InvalidRequestError, NotFoundError

logger = logging.getLogger(__name__)

CONTACT_STATES: tuple[str, ...] = ("pendiente", "respondido", "en_proceso", "rechazado")

# States that close a request and stamp fecha_respuesta
_ANSWERED_STATES = ("respondido", "rechazado")


def list_contact_messages(cliente_id: int | None = None, estado: str | None = None) -> list[dict[str, Any]]:
    clauses: list[str] = []
    params: list[Any] = []
    if cliente_id is not None:
        clauses.append("AND c.cliente_id = ?")
        params.append(cliente_id)
    if estado:
        clauses.append("AND c.estado = ?")
        params.append(estado)
    with connect() as conn:
        rows = conn.execute(
            f"""
            SELECT
                c.*,
                u.nombre   AS usuario_nombre,
                u.apellido AS usuario_apellido,
                u.email    AS usuario_email
            FROM contacto c
            LEFT JOIN usuarios u ON c.cliente_id = u.id
            WHERE 1=1 {' '.join(clauses)}
            ORDER BY c.fecha_creacion DESC, c.id DESC
            """,
            params,
        ).fetchall()
    result = rows_to_dicts(rows)
    logger.info(
        "[contact_service:list_contact_messages] IN  cliente_id=%s estado=%s OUT count=%d",
        cliente_id,
        estado,
        len(result),
    )
    return result


def create_contact_message(user_id: int, asunto: str, mensaje: str) -> dict[str, Any]:
    """Store a pending request from the user; the sender's public fields are attached as `usuario`."""
    with connect() as conn:
        cur = conn.execute(
            """
            INSERT INTO contacto (cliente_id, asunto, mensaje, estado, fecha_creacion)
            VALUES (?, ?, ?, 'pendiente', ?)
            """,
            (user_id, asunto, mensaje, utc_now()),
        )
        created = dict(conn.execute("SELECT * FROM contacto WHERE id = ?", (cur.lastrowid,)).fetchone())
        usuario = row_to_dict(
            conn.execute(
                "SELECT id, nombre, apellido, email FROM usuarios WHERE id = ? LIMIT 1", (user_id,)
            ).fetchone()
        )
    logger.info("[contact_service:create_contact_message] OUT id=%s user_id=%s", created["id"], user_id)
    return {**created, "usuario": usuario}


def update_contact_state(message_id: int, estado: str) -> dict[str, Any]:
    """
    Move a request to a new state.

    Raises:
        InvalidRequestError: unknown state.
        NotFoundError: no such request.
    """
    if estado not in CONTACT_STATES:
        raise InvalidRequestError(f"Estado inválido. Usa uno de: {', '.join(CONTACT_STATES)}")
    answered_at = utc_now() if estado in _ANSWERED_STATES else None
    with connect() as conn:
        cur = conn.execute(
            """
            UPDATE contacto
            SET estado = ?, fecha_respuesta = COALESCE(?, fecha_respuesta)
            WHERE id = ?
            """,
            (estado, answered_at, message_id),
        )
        if cur.rowcount == 0:
            raise NotFoundError("Mensaje no encontrado")
        row = conn.execute("SELECT * FROM contacto WHERE id = ?", (message_id,)).fetchone()
    logger.info("[contact_service:update_contact_state] OUT id=%s estado=%s", message_id, estado)
    return dict(row)

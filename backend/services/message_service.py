"""
Internal messages (mensajes) between users.
"""

import logging
import sqlite3
from typing import Any

from backend.core.db import connect, rows_to_dicts, utc_now
from backend.core.errors import InvalidRequestError

logger = logging.getLogger(__name__)


def list_messages(
    remitente_id: int | None = None,
    destinatario_id: int | None = None,
    leido: bool | None = None,
) -> list[dict[str, Any]]:
    clauses: list[str] = []
    params: list[Any] = []
    if remitente_id:
        clauses.append("AND m.remitente_id = ?")
        params.append(remitente_id)
    if destinatario_id:
        clauses.append("AND m.destinatario_id = ?")
        params.append(destinatario_id)
    if leido is not None:
        clauses.append("AND m.leido = ?")
        params.append(leido)
    with connect() as conn:
        rows = conn.execute(
            f"""
            SELECT
                m.*,
                urem.nombre    AS remitente_nombre,
                urem.apellido  AS remitente_apellido,
                urem.email     AS remitente_email,
                udest.nombre   AS destinatario_nombre,
                udest.apellido AS destinatario_apellido,
                udest.email    AS destinatario_email
            FROM mensajes m
            LEFT JOIN usuarios urem ON m.remitente_id = urem.id
            LEFT JOIN usuarios udest ON m.destinatario_id = udest.id
            WHERE 1=1 {' '.join(clauses)}
            ORDER BY m.fecha_envio DESC, m.id DESC
            """,
            params,
        ).fetchall()
    result = rows_to_dicts(rows)
    logger.info("[message_service:list_messages] OUT count=%d", len(result))
    return result


def create_message(remitente_id: int, destinatario_id: int, asunto: str, contenido: str) -> dict[str, Any]:
    """
    Store a message.

    Raises:
        InvalidRequestError: sender or recipient does not exist.
    """
    try:
        with connect() as conn:
            cur = conn.execute(
                """
                INSERT INTO mensajes (remitente_id, destinatario_id, asunto, contenido, fecha_envio)
                VALUES (?, ?, ?, ?, ?)
                """,
                (remitente_id, destinatario_id, asunto, contenido, utc_now()),
            )
            row = conn.execute("SELECT * FROM mensajes WHERE id = ?", (cur.lastrowid,)).fetchone()
    except sqlite3.IntegrityError as e:
        raise InvalidRequestError("remitente_id o destinatario_id no existen") from e
    logger.info(
        "[message_service:create_message] OUT id=%s remitente_id=%s destinatario_id=%s",
        row["id"],
        remitente_id,
        destinatario_id,
    )
    return dict(row)

"""
Architect assignments (asignaciones): a manager pairs a client with an architect,
the architect accepts or rejects, and the first report for it is linked back.
"""

import logging
import sqlite3
from typing import Any

from backend.core.db import connect, rows_to_dicts, utc_now
from backend.core.errors import InvalidRequestError, NotFoundError

logger = logging.getLogger(__name__)

ASSIGNMENT_STATES: tuple[str, ...] = ("pendiente", "aceptada", "rechazada")

_ENRICHED_SELECT = """
    SELECT
        a.*,
        ucli.nombre   AS cliente_nombre,
        ucli.apellido AS cliente_apellido,
        ucli.email    AS cliente_email,
        uarq.nombre   AS arquitecto_nombre,
        uarq.apellido AS arquitecto_apellido
    FROM asignaciones a
    LEFT JOIN usuarios ucli ON a.cliente_id = ucli.id
    LEFT JOIN arquitectos arq ON a.arquitecto_id = arq.id
    LEFT JOIN usuarios uarq ON arq.usuario_id = uarq.id
"""


def list_assignments(arquitecto_id: int | None = None) -> list[dict[str, Any]]:
    """All assignments, or only one architect's when arquitecto_id is given."""
    where = "WHERE a.arquitecto_id = ?" if arquitecto_id is not None else ""
    params = (arquitecto_id,) if arquitecto_id is not None else ()
    with connect() as conn:
        rows = conn.execute(
            f"{_ENRICHED_SELECT} {where} ORDER BY a.fecha_asignacion DESC, a.id DESC", params
        ).fetchall()
    result = rows_to_dicts(rows)
    logger.info("[assignment_service:list_assignments] IN  arquitecto_id=%s OUT count=%d", arquitecto_id, len(result))
    return result


def create_assignment(cliente_id: int, arquitecto_id: int, notas: str | None = None) -> dict[str, Any]:
    """
    Create a pending assignment and return it enriched with client/architect names.

    Raises:
        InvalidRequestError: the client user or the architect does not exist.
    """
    notas = notas.strip() if isinstance(notas, str) else None
    now = utc_now()
    try:
        with connect() as conn:
            cur = conn.execute(
                """
                INSERT INTO asignaciones (cliente_id, arquitecto_id, notas, fecha_asignacion, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (cliente_id, arquitecto_id, notas, now, now),
            )
            row = conn.execute(f"{_ENRICHED_SELECT} WHERE a.id = ?", (cur.lastrowid,)).fetchone()
    except sqlite3.IntegrityError as e:
        raise InvalidRequestError("cliente_id o arquitecto_id no existen") from e
    logger.info(
        "[assignment_service:create_assignment] OUT id=%s cliente_id=%s arquitecto_id=%s",
        row["id"],
        cliente_id,
        arquitecto_id,
    )
    return dict(row)


def update_assignment(assignment_id: int, estado: str | None = None, notas: str | None = None) -> dict[str, Any]:
    """
    Change state and/or notes; omitted fields keep their stored value.

    Raises:
        InvalidRequestError: nothing to update or unknown state.
        NotFoundError: no such assignment.
    """
    if not estado and notas is None:
        raise InvalidRequestError("Envía 'estado' y/o 'notas'.")
    if estado and estado not in ASSIGNMENT_STATES:
        raise InvalidRequestError(f"Estado inválido: {estado}")
    with connect() as conn:
        cur = conn.execute(
            """
            UPDATE asignaciones
            SET estado = COALESCE(?, estado),
                notas = COALESCE(?, notas),
                updated_at = ?
            WHERE id = ?
            """,
            (estado or None, notas, utc_now(), assignment_id),
        )
        if cur.rowcount == 0:
            raise NotFoundError("Asignación no encontrada")
        row = conn.execute("SELECT * FROM asignaciones WHERE id = ?", (assignment_id,)).fetchone()
    logger.info("[assignment_service:update_assignment] OUT id=%s estado=%s", assignment_id, row["estado"])
    return dict(row)

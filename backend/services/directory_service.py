"""
Architect and client directories with their workload counters.
"""

import logging
from typing import Any

from backend.core.db import connect, row_to_dict, rows_to_dicts

logger = logging.getLogger(__name__)


def list_architects(email: str | None = None) -> list[dict[str, Any]]:
    """Architects with proyectos_activos = number of accepted assignments."""
    where = "WHERE a.email = ?" if email else ""
    params = (email,) if email else ()
    with connect() as conn:
        rows = conn.execute(
            f"""
            SELECT
                a.id, a.nombre, a.apellido, a.email, a.fecha_registro,
                COUNT(DISTINCT CASE WHEN asig.estado = 'aceptada' THEN asig.id END) AS proyectos_activos
            FROM arquitectos a
            LEFT JOIN asignaciones asig ON a.id = asig.arquitecto_id
            {where}
            GROUP BY a.id
            ORDER BY a.nombre, a.apellido
            """,
            params,
        ).fetchall()
    result = rows_to_dicts(rows)
    logger.info("[directory_service:list_architects] IN  email_filter=%s OUT count=%d", bool(email), len(result))
    return result


def list_clients(email: str | None = None) -> list[dict[str, Any]]:
    """Clients with total_informes = reports issued to the client's user account."""
    where = "WHERE c.email = ?" if email else ""
    params = (email,) if email else ()
    with connect() as conn:
        rows = conn.execute(
            f"""
            SELECT
                c.id, c.nombre, c.apellido, c.email, c.fecha_registro,
                COUNT(DISTINCT i.id) AS total_informes
            FROM clientes c
            LEFT JOIN informes i ON c.usuario_id = i.cliente_id
            {where}
            GROUP BY c.id
            ORDER BY c.nombre, c.apellido
            """,
            params,
        ).fetchall()
    result = rows_to_dicts(rows)
    logger.info("[directory_service:list_clients] IN  email_filter=%s OUT count=%d", bool(email), len(result))
    return result


def find_architect_id(user_id: int | None, email: str | None) -> int | None:
    """Architect record for a user: by usuario_id first, then case-insensitive email."""
    with connect() as conn:
        row = None
        if user_id:
            row = conn.execute(
                "SELECT id FROM arquitectos WHERE usuario_id = ? LIMIT 1", (user_id,)
            ).fetchone()
        if row is None and email:
            row = conn.execute(
                "SELECT id FROM arquitectos WHERE LOWER(email) = LOWER(?) LIMIT 1", (email,)
            ).fetchone()
    found = row_to_dict(row)
    return found["id"] if found else None

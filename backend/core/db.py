"""
SQLite storage for users, assignments, inspection reports, contact requests and messages.

Creates data/app.db (relative to project root, override with DATABASE_PATH).
All queries are parameterized; callers use connect() as a unit of work.
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

from backend.core.config import DATABASE_PATH
from backend.core.report_sections import SECTIONS, property_ddl

logger = logging.getLogger(__name__)

# Project root
_ROOT = Path(__file__).resolve().parent.parent.parent
_DB_PATH = Path(DATABASE_PATH) if Path(DATABASE_PATH).is_absolute() else _ROOT / DATABASE_PATH

sqlite3.register_converter("BOOLEAN", lambda raw: bool(int(raw)))
sqlite3.register_converter("JSON", json.loads)

# Timestamp defaults use the same text format as utc_now() so rows sort together
_SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS usuarios (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        email TEXT NOT NULL UNIQUE,
        nombre TEXT NOT NULL,
        apellido TEXT NOT NULL DEFAULT '',
        rol TEXT NOT NULL DEFAULT 'cliente',
        telefono TEXT,
        activo BOOLEAN NOT NULL DEFAULT 1,
        fecha_registro TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f+00:00', 'now')),
        updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f+00:00', 'now'))
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS arquitectos (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        usuario_id INTEGER REFERENCES usuarios(id) ON DELETE SET NULL,
        nombre TEXT NOT NULL,
        apellido TEXT NOT NULL DEFAULT '',
        email TEXT NOT NULL,
        fecha_registro TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f+00:00', 'now'))
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS clientes (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        usuario_id INTEGER REFERENCES usuarios(id) ON DELETE SET NULL,
        nombre TEXT NOT NULL,
        apellido TEXT NOT NULL DEFAULT '',
        email TEXT NOT NULL,
        fecha_registro TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f+00:00', 'now'))
    )
    """,
    property_ddl(),
    """
    CREATE TABLE IF NOT EXISTS informes (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        inmueble_id INTEGER NOT NULL REFERENCES inmuebles(id),
        cliente_id INTEGER REFERENCES usuarios(id),
        arquitecto_id INTEGER REFERENCES arquitectos(id),
        tipo_informe TEXT NOT NULL,
        estado TEXT NOT NULL DEFAULT 'borrador',
        aprobado BOOLEAN,
        coste_estimado_reparacion NUMERIC DEFAULT 0,
        resumen_ejecutivo_texto TEXT,
        created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f+00:00', 'now')),
        updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f+00:00', 'now'))
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS asignaciones (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        cliente_id INTEGER NOT NULL REFERENCES usuarios(id),
        arquitecto_id INTEGER NOT NULL REFERENCES arquitectos(id),
        estado TEXT NOT NULL DEFAULT 'pendiente',
        notas TEXT,
        informe_id INTEGER REFERENCES informes(id) ON DELETE SET NULL,
        creado BOOLEAN NOT NULL DEFAULT 0,
        fecha_asignacion TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f+00:00', 'now')),
        updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f+00:00', 'now'))
    )
    """,
    *[section.ddl() for section in SECTIONS],
    """
    CREATE TABLE IF NOT EXISTS contacto (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        cliente_id INTEGER NOT NULL REFERENCES usuarios(id),
        asunto TEXT NOT NULL,
        mensaje TEXT NOT NULL,
        estado TEXT NOT NULL DEFAULT 'pendiente',
        fecha_creacion TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f+00:00', 'now')),
        fecha_respuesta TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS mensajes (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        remitente_id INTEGER NOT NULL REFERENCES usuarios(id),
        destinatario_id INTEGER NOT NULL REFERENCES usuarios(id),
        asunto TEXT NOT NULL,
        contenido TEXT NOT NULL,
        leido BOOLEAN NOT NULL DEFAULT 0,
        fecha_envio TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f+00:00', 'now'))
    )
    """,
]


def utc_now() -> str:
    """UTC timestamp in the same text format as the column defaults (millisecond ISO 8601)."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


def _get_conn() -> sqlite3.Connection:
    data_dir = _DB_PATH.parent
    data_dir.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(_DB_PATH), detect_types=sqlite3.PARSE_DECLTYPES)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def connect() -> Iterator[sqlite3.Connection]:
    """Open a connection; commit on success, roll back on error, always close."""
    conn = _get_conn()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db() -> None:
    """Create every table if it does not exist."""
    with connect() as conn:
        for statement in _SCHEMA:
            conn.execute(statement)
    logger.info("[db:init_db] OUT path=%s tables=%s", _DB_PATH, len(_SCHEMA))


def row_to_dict(row: sqlite3.Row | None) -> dict[str, Any] | None:
    if row is None:
        return None
    return dict(row)


def rows_to_dicts(rows: list[sqlite3.Row]) -> list[dict[str, Any]]:
    return [dict(row) for row in rows]


def clear_all() -> None:
    """Delete all rows from every table (children first). Used by the seed script's --reset."""
    init_db()
    with connect() as conn:
        tables = [
            "mensajes",
            "contacto",
            *[section.table for section in SECTIONS],
            "asignaciones",
            "informes",
            "inmuebles",
            "clientes",
            "arquitectos",
            "usuarios",
        ]
        for table in tables:
            conn.execute(f"DELETE FROM {table}")
    logger.info("[db:clear_all] cleared tables=%d", len(tables))

"""
Tests for the SQLite layer: timestamp format shared by column defaults and utc_now().
"""

import re
import time

from backend.core import db
from backend.services.assignment_service import create_assignment, list_assignments

_TIMESTAMP = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}\+00:00$")


def test_utc_now_format() -> None:
    assert _TIMESTAMP.match(db.utc_now())


def test_default_and_service_timestamps_sort_together(make_user) -> None:
    cliente = make_user("c@example.com")
    arq = make_user("arq@example.com", rol="arquitecto")
    by_service = create_assignment(cliente["id"], arq["arquitectos_id"])["id"]
    time.sleep(0.01)
    with db.connect() as conn:
        by_default = conn.execute(
            "INSERT INTO asignaciones (cliente_id, arquitecto_id) VALUES (?, ?)",
            (cliente["id"], arq["arquitectos_id"]),
        ).lastrowid

    rows = list_assignments()
    assert [r["id"] for r in rows] == [by_default, by_service]
    for row in rows:
        assert _TIMESTAMP.match(row["fecha_asignacion"])
        assert _TIMESTAMP.match(row["updated_at"])
    assert _TIMESTAMP.match(cliente["fecha_registro"])

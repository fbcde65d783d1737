"""
Tests for scripts/seed_db.py and db.clear_all().
"""

from backend.core import db
from backend.services.user_service import get_user_by_email
from scripts.seed_db import SEED_USERS, seed_users


def _count(table: str) -> int:
    with db.connect() as conn:
        return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


def test_seed_users_is_idempotent() -> None:
    assert seed_users() == len(SEED_USERS)
    seed_users()
    assert _count("usuarios") == 3
    assert _count("arquitectos") == 1
    assert _count("clientes") == 1
    assert get_user_by_email("gestor@lhpartners.es")["rol"] == "gestor"


def test_clear_all_empties_tables_and_keeps_schema() -> None:
    seed_users()
    db.clear_all()
    assert _count("usuarios") == 0
    assert _count("arquitectos") == 0
    assert _count("inspectores") == 0

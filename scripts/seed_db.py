#!/usr/bin/env python3
"""
Seed the application SQLite DB for demos or tests.

Creates data/app.db (if missing), ensures every table exists, and inserts one
user per role plus the matching arquitectos/clientes directory rows.
Use --reset to clear existing rows first.

Run from project root:

    python scripts/seed_db.py
    python scripts/seed_db.py --reset

Edit SEED_USERS below to add or change demo accounts.
"""

import argparse
import sys
from pathlib import Path

# Project root on path so "backend" resolves
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from backend.core.db import clear_all, connect, init_db
from backend.services.user_service import create_or_update_user

# (email, nombre, apellido, rol)
SEED_USERS = [
    ("gestor@lhpartners.es", "Laura", "Hidalgo", "gestor"),
    ("arquitecto@lhpartners.es", "Marcos", "Peña", "arquitecto"),
    ("cliente@lhpartners.es", "Ana", "Ruiz", "cliente"),
]

# Roles that also get a directory row, keyed by table
_DIRECTORY_TABLES = {"arquitecto": "arquitectos", "cliente": "clientes"}


def seed_users() -> int:
    """Upsert SEED_USERS and their directory rows. Returns the number of users seeded."""
    for email, nombre, apellido, rol in SEED_USERS:
        user = create_or_update_user(email, nombre, apellido, rol)
        table = _DIRECTORY_TABLES.get(rol)
        if table is None:
            continue
        with connect() as conn:
            exists = conn.execute(f"SELECT id FROM {table} WHERE usuario_id = ?", (user["id"],)).fetchone()
            if exists is None:
                conn.execute(
                    f"INSERT INTO {table} (usuario_id, nombre, apellido, email) VALUES (?, ?, ?, ?)",
                    (user["id"], nombre, apellido, email),
                )
    return len(SEED_USERS)


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the application DB for demos/tests.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear all existing rows before inserting seed users.",
    )
    args = parser.parse_args()

    init_db()
    if args.reset:
        clear_all()
        print("Cleared existing rows.")

    count = seed_users()
    for email, _, _, rol in SEED_USERS:
        print(f"  seeded: {email} ({rol})")

    print(f"Done. Seeded {count} users.")


if __name__ == "__main__":
    main()

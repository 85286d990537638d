"""
Database setup script.

Creates the locations / favorite_locations / location_history tables on the
configured DATABASE_URL. Production deployments should run the Alembic
revisions in backend/alembic instead.

Usage:
    python scripts/setup_database.py
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from sqlalchemy import inspect  # noqa: E402

from app.db.session import engine, init_db  # noqa: E402


def main():
    print("=" * 50)
    print("Weather Dashboard database setup")
    print("=" * 50)

    print(f"\n1. Connecting to {engine.url.render_as_string(hide_password=True)}...")
    with engine.connect():
        pass
    print("   Connected!")

    print("\n2. Creating tables...")
    init_db()
    tables = inspect(engine).get_table_names()
    for name in ("locations", "favorite_locations", "location_history"):
        status = "ok" if name in tables else "MISSING"
        print(f"   {name}: {status}")

    print("\nDone.")


if __name__ == "__main__":
    main()

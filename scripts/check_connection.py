#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the configured store is reachable and the schema exists.
Usage: python scripts/check_connection.py
"""
import sys
sys.path.insert(0, '.')

from sqlalchemy import inspect

from app.core.config import get_settings
from app.db.database import Database, metadata


def main() -> int:
    settings = get_settings()
    print("=" * 50)
    print("TEACHER DASHBOARD - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Connecting to store...")
    print(f"    URL: {settings.database_url}")
    db = Database(settings.database_url)
    if not db.test_connection():
        print("    ❌ Store: FAILED")
        return 1
    print("    ✅ Store: CONNECTED")

    print("\n[2] Checking tables...")
    existing = set(inspect(db.engine).get_table_names())
    missing = [name for name in metadata.tables if name not in existing]
    for name in metadata.tables:
        print(f"    {'✅' if name in existing else '⚠️ '} {name}")
    if missing:
        print("    Tables are created on first API start-up.")

    db.dispose()
    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(main())

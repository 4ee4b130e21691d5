#!/usr/bin/env python3
"""
Database initialization script for ADHD Planner
Creates the SQLite record store and seeds the default emergency plans
"""

import sqlite3
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from adhd_planner.core.config import Config
from adhd_planner.core.database import SQLiteDatabase
from adhd_planner.core.store import RecordStore, SQLiteAdapter


def init_database(db_path: Path = None, force: bool = False) -> bool:
    """
    Initialize the database with the record store schema.

    Args:
        db_path: Database file (defaults to the configured database_path)
        force: Overwrite an existing database without asking
    """
    if db_path is None:
        db_path = Config().get_database_path()

    if db_path.exists():
        if not force:
            response = input(f"Database already exists at {db_path}. Overwrite? (yes/no): ")
            if response.lower() != 'yes':
                print("Aborting database initialization.")
                return False
        db_path.unlink()

    print(f"Creating database at {db_path}...")
    try:
        db = SQLiteDatabase(db_path, create=True)
        store = RecordStore(SQLiteAdapter(db))
    except sqlite3.Error as e:
        print(f"✗ Database error: {e}")
        return False

    print("✓ Database schema created successfully!")
    print(f"✓ Database location: {db_path}")
    print(f"✓ Emergency plans seeded: {len(store.list_emergency_plans())}")
    tables = db.execute("SELECT name FROM sqlite_master WHERE type='table' ORDER BY name;")
    print(f"\n✓ Tables created: {', '.join(t['name'] for t in tables)}")
    return True


if __name__ == "__main__":
    print("=" * 60)
    print("ADHD Planner - Database Initialization")
    print("=" * 60)
    print()

    success = init_database(force="--force" in sys.argv)

    print("\n" + "=" * 60)
    print("Database initialization complete!" if success else "Database initialization failed!")
    print("=" * 60)
    sys.exit(0 if success else 1)

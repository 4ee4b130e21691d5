"""
Unit tests for the database initialization script.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from scripts.init_db import init_database
from adhd_planner.core.database import SQLiteDatabase
from adhd_planner.core.store import RecordStore, SQLiteAdapter


class TestInitDatabase:

    def test_creates_schema_and_seeds_plans(self, tmp_path):
        db_path = tmp_path / "planner.db"
        assert init_database(db_path, force=True)

        db = SQLiteDatabase(db_path)
        plans = db.execute("SELECT id FROM records WHERE kind = ?", ("emergency_plan",))
        assert len(plans) == 2

    def test_force_replaces_existing_database(self, tmp_path):
        db_path = tmp_path / "planner.db"
        init_database(db_path, force=True)
        store = RecordStore(SQLiteAdapter(SQLiteDatabase(db_path)))
        store.create("task", {"title": "Old data"})

        assert init_database(db_path, force=True)
        reopened = RecordStore(SQLiteAdapter(SQLiteDatabase(db_path)))
        assert reopened.tasks.all() == []

    def test_declined_overwrite_keeps_database(self, tmp_path, monkeypatch):
        db_path = tmp_path / "planner.db"
        init_database(db_path, force=True)
        monkeypatch.setattr("builtins.input", lambda prompt: "no")

        assert not init_database(db_path)
        assert db_path.exists()

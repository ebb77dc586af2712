import os

import pytest

import mapty.appconfig as mcfg
from mapty.database import get_all_models, migrate_tables
from mapty.db import configure_db, get_db
from mapty.kvstore import KeyValue


@pytest.fixture(scope="session", autouse=True)
def test_db():
    test_db_path = "test.sqlite3"
    configure_db(test_db_path)
    db = get_db()
    # Rebind all models to the test DB
    for model in get_all_models():
        model._meta.set_database(db)
    db.connect(reuse_if_open=True)
    migrate_tables(get_all_models())
    yield
    db.close()
    for suffix in ("", "-wal", "-shm"):
        if os.path.exists(test_db_path + suffix):
            os.remove(test_db_path + suffix)


@pytest.fixture(autouse=True)
def clean_storage(monkeypatch):
    """Start every test with an empty key-value table and no config file."""
    monkeypatch.setattr(mcfg, "_FILE_PATHS", [])
    KeyValue.delete().execute()
    yield

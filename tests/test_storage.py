import sqlite3

import pytest

from sensorlink.package import Package
from sensorlink.storage import Storage, ensure_database


def test_ensure_database_creates_directory_and_file(tmp_path):
    db = tmp_path / "view" / "data.db"
    ensure_database(db)
    assert db.parent.is_dir()
    assert db.is_file()


def test_ensure_database_keeps_existing_file(tmp_path):
    db = tmp_path / "data.db"
    db.write_bytes(b"")
    ensure_database(db)
    assert db.read_bytes() == b""


def test_ensure_database_parent_is_file(tmp_path, capsys):
    blocker = tmp_path / "view"
    blocker.write_text("not a directory")
    ensure_database(blocker / "data.db")
    assert blocker.is_file()
    assert "not a directory" in capsys.readouterr().err


def test_insert_and_rows(tmp_path):
    db = tmp_path / "view" / "data.db"
    first = Package(id=1, temperature=-5, humidity=40, time=1000)
    second = Package(id=2, temperature=30, humidity=90, time=2000)
    with Storage(db) as store:
        store.insert(first)
        store.insert(second)
        rows = store.rows()
    assert [row[1:] for row in rows] == [(1, -5, 40, 1000), (2, 30, 90, 2000)]
    assert rows[0][0] < rows[1][0]


def test_rows_empty(tmp_path):
    with Storage(tmp_path / "data.db") as store:
        assert store.rows() == []


def test_data_persists_across_instances(tmp_path):
    db = tmp_path / "data.db"
    pkg = Package(id=8, temperature=21, humidity=50, time=42)
    with Storage(db) as store:
        store.insert(pkg)
    with Storage(db) as store:
        assert [row[1:] for row in store.rows()] == [(8, 21, 50, 42)]


def test_close_then_query_fails(tmp_path):
    store = Storage(tmp_path / "data.db")
    store.close()
    with pytest.raises(sqlite3.ProgrammingError):
        store.rows()
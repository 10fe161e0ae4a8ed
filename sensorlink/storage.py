"""SQLite storage for received sensor readings."""

from __future__ import annotations

import os
import sqlite3
import sys
import threading
from pathlib import Path
from typing import List, Tuple, Union

from .package import Package
from .utils import SQLITE_PATH

_CREATE_TABLE = (
    "CREATE TABLE IF NOT EXISTS data ("
    "no INTEGER PRIMARY KEY AUTOINCREMENT,"
    "id INT, "
    "temperature INT, "
    "humidity INT, "
    "time INT"
    ");"
)

_INSERT = "INSERT INTO data (id, temperature, humidity, time) VALUES (?, ?, ?, ?);"

PathLike = Union[str, "os.PathLike[str]"]


def ensure_database(path: PathLike = SQLITE_PATH) -> None:
    """Make sure the database's directory and file exist, creating them if missing."""
    db_path = Path(path)
    directory = db_path.parent
    if not directory.exists():
        try:
            directory.mkdir(mode=0o755, parents=True)
        except OSError:
            print("Error creating directory.")
            return
        print(f"Directory created: {directory}")
    elif not directory.is_dir():
        print(f"Path exists but is not a directory: {directory}", file=sys.stderr)
        return

    if not db_path.exists():
        try:
            db_path.touch()
        except OSError:
            print("Error creating sqlite database.")
            return
        print(f"Sqlite database created: {db_path}")


class Storage:
    """Thread-safe store of sensor readings in a ``data`` table."""

    def __init__(self, path: PathLike = SQLITE_PATH) -> None:
        print("Initializing SQLite.")
        ensure_database(path)
        self.path = Path(path)
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(str(self.path), check_same_thread=False)
        print("SQLite opened successfully.")
        try:
            with self._conn:
                self._conn.execute(_CREATE_TABLE)
        except sqlite3.Error:
            print("Create table failed.")

    def insert(self, package: Package) -> None:
        """Store one reading; failures are reported, not raised."""
        try:
            with self._lock, self._conn:
                self._conn.execute(
                    _INSERT,
                    (package.id, package.temperature, package.humidity, package.time),
                )
        except sqlite3.Error as exc:
            print(f"Insert data failed: {exc}", file=sys.stderr)

    def rows(self) -> List[Tuple[int, int, int, int, int]]:
        """Return all stored rows as (no, id, temperature, humidity, time), oldest first."""
        with self._lock:
            cursor = self._conn.execute(
                "SELECT no, id, temperature, humidity, time FROM data ORDER BY no"
            )
            return cursor.fetchall()

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            self._conn.close()

    def __enter__(self) -> "Storage":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
"""Shared test fixtures."""

import sqlite3

import pytest

from decaf.config import Settings
from decaf.rows import read_values, scan_columns
from decaf.service import ConnectorService
from decaf.types import ConnectionInfo

ENV = {
    "DB_USER": "decaf",
    "DB_PASS": "s3cret",
    "DB_NAME": "coffee_db",
    "DB_REGION": "europe-west1",
    "DB_INSTANCE": "decaf-instance",
    "DB_PROJECT": "db-project",
}


def coffee_rows() -> list[tuple[int, str, str]]:
    """52 rows; the 51st is Ethiopian and the integer parts of all prices sum to 230."""
    rows = []
    for i in range(1, 53):
        price = "5.25" if i <= 22 else "4.10"
        rows.append((i, f"Bean {i}", price))
    rows[50] = (51, "Ethiopian", "4.50")
    return rows


def _seed_coffee(db_path, rows) -> None:
    conn = sqlite3.connect(db_path)
    try:
        conn.execute("CREATE TABLE coffee (id INTEGER PRIMARY KEY, name TEXT, price TEXT)")
        conn.executemany("INSERT INTO coffee (id, name, price) VALUES (?, ?, ?)", rows)
        conn.commit()
    finally:
        conn.close()


class _SQLiteConnector:
    """Stands in for a managed connector: "dials" a local SQLite file."""

    def __init__(self):
        self.closed = False

    def connect(self, target, driver, **kwargs):
        return sqlite3.connect(target)

    def close(self):
        self.closed = True


class SQLiteCoffeeService(ConnectorService):
    driver = "sqlite3"
    driver_errors = (sqlite3.Error,)

    def __init__(self, info, db_path, mysql_rows: bool = False):
        super().__init__(info)
        self._db_path = str(db_path)
        self.read_row = scan_columns if mysql_rows else read_values
        self.connector = None

    @property
    def target(self) -> str:
        return self._db_path

    def _new_connector(self):
        self.connector = _SQLiteConnector()
        return self.connector


@pytest.fixture
def coffee_db(tmp_path):
    """A SQLite file with the standard 52-row coffee table."""
    db_path = tmp_path / "coffee.db"
    _seed_coffee(db_path, coffee_rows())
    return db_path


@pytest.fixture
def settings():
    return Settings(
        db_type="CLOUD_SQL_MYSQL",
        bond_url="http://bond.test",
        project_id="decaf-project",
        environ=dict(ENV),
    )


@pytest.fixture
def db_env():
    """A complete set of DB_* variables, without DB_CLUSTER."""
    return dict(ENV)


@pytest.fixture
def db_info(db_env):
    return ConnectionInfo.from_environ(db_env)


@pytest.fixture
def seed_coffee():
    """Create and fill a coffee table: ``seed_coffee(db_path, rows)``."""
    return _seed_coffee


@pytest.fixture
def sqlite_service():
    """Build a SQLite-backed service: ``sqlite_service(info, db_path, mysql_rows=False)``."""
    return SQLiteCoffeeService

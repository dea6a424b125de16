from __future__ import annotations

from datetime import time, timedelta
from pathlib import Path

import mysql.connector
import pytest

from src.hr_reconciliation.hr_reconciliation.core.exceptions import DataSourceError
from src.hr_reconciliation.hr_reconciliation.database.bootstrap import _strip_create_db_and_use, split_sql_statements
from src.hr_reconciliation.hr_reconciliation.database.mysql_base import db_cursor, normalize_mysql_time

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


class FakeCursor:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class FakeConn:
    def __init__(self):
        self.cur = FakeCursor()
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cur

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn=None, *, refuse=False):
        self.conn = conn
        self.refuse = refuse

    def connect(self):
        if self.refuse:
            raise mysql.connector.Error("Can't connect to MySQL server")
        return self.conn


def test_db_cursor_commits_and_closes():
    conn = FakeConn()

    with db_cursor(FakeFactory(conn), source="attendance") as (_, cur):
        assert cur is conn.cur

    assert conn.committed and conn.closed and conn.cur.closed
    assert not conn.rolled_back


def test_connector_error_becomes_data_source_error():
    conn = FakeConn()

    with pytest.raises(DataSourceError) as exc:
        with db_cursor(FakeFactory(conn), source="holidays"):
            raise mysql.connector.Error("Table 'hr_db.holidays' doesn't exist")

    assert exc.value.source == "holidays"
    assert conn.rolled_back and conn.closed
    assert not conn.committed


def test_connect_failure_becomes_data_source_error():
    with pytest.raises(DataSourceError) as exc:
        with db_cursor(FakeFactory(refuse=True), source="leave"):
            pass

    assert exc.value.source == "leave"


def test_other_errors_roll_back_and_propagate():
    conn = FakeConn()

    with pytest.raises(KeyError):
        with db_cursor(FakeFactory(conn)):
            raise KeyError("employee_id")

    assert conn.rolled_back and conn.closed


def test_normalize_mysql_time_handles_connector_shapes():
    assert normalize_mysql_time(None) is None
    assert normalize_mysql_time(time(7, 30)) == time(7, 30)
    assert normalize_mysql_time(timedelta(hours=7, minutes=30)) == time(7, 30)
    assert normalize_mysql_time("08:15") == time(8, 15)
    assert normalize_mysql_time("08:15:20") == time(8, 15, 20)
    assert normalize_mysql_time("8am") is None
    assert normalize_mysql_time("25:00") is None


def test_split_sql_statements_ignores_semicolons_in_quotes_and_comments():
    sql = "-- setup; part one\nINSERT INTO holidays VALUES ('2025-01-01', 'New Year; day');\nSELECT 1;"

    assert list(split_sql_statements(sql)) == [
        "INSERT INTO holidays VALUES ('2025-01-01', 'New Year; day')",
        "SELECT 1",
    ]


def test_schema_creates_every_table():
    statements = list(split_sql_statements(_strip_create_db_and_use(SCHEMA.read_text(encoding="utf-8"))))

    assert len(statements) == 7
    assert all(s.startswith("CREATE TABLE IF NOT EXISTS") for s in statements)
    assert any("UNIQUE KEY uq_payroll_employee_period (employee_id, period)" in s for s in statements)

import pytest

from src.hr_reconciliation.hr_reconciliation.core.enums import EmployeeStatus
from src.hr_reconciliation.hr_reconciliation.core.exceptions import DataSourceError
from src.hr_reconciliation.hr_reconciliation.users.mysql_employee_repository import MySQLEmployeeDirectory


class FakeCursor:
    def __init__(self, rows):
        self.rows = rows

    def execute(self, sql, params=()):
        pass

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return self.rows

    def close(self):
        pass


class FakeConn:
    def __init__(self, rows):
        self.rows = rows

    def cursor(self, dictionary=True):
        return FakeCursor(self.rows)

    def commit(self):
        pass

    def rollback(self):
        pass

    def close(self):
        pass


class FakeFactory:
    def __init__(self, rows):
        self.rows = rows

    def connect(self):
        return FakeConn(self.rows)


def _row(status="Active", badge=" 42 "):
    return {
        "employee_id": "E1",
        "badge": badge,
        "full_name": "Dana Example",
        "status": status,
        "campus": "North",
        "hourly_rate": "25.50",
    }


def test_rows_map_to_employees():
    employees = MySQLEmployeeDirectory(FakeFactory([_row(), _row(status="On Leave", badge=None)])).list_employees()

    assert employees[0].badge_key == "42"
    assert employees[0].hourly_rate == 25.5
    assert employees[1].status == EmployeeStatus.ON_LEAVE
    assert employees[1].badge == "E1"


def test_get_by_id_missing_row_is_none():
    assert MySQLEmployeeDirectory(FakeFactory([])).get_by_id("E404") is None


@pytest.mark.parametrize("status", ["active", "Suspended"])
def test_unknown_status_is_a_data_source_error(status):
    directory = MySQLEmployeeDirectory(FakeFactory([_row(status=status)]))

    with pytest.raises(DataSourceError) as exc:
        directory.get_by_id("E1")

    assert exc.value.source == "employees"

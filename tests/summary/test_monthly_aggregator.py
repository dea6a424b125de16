from __future__ import annotations

from datetime import date, datetime

import pytest

from src.hr_reconciliation.hr_reconciliation.attendance.model import AttendanceEvent
from src.hr_reconciliation.hr_reconciliation.core.enums import LeaveStatus
from src.hr_reconciliation.hr_reconciliation.core.exceptions import DataSourceError, ValidationError
from src.hr_reconciliation.hr_reconciliation.requests.model import LeaveRequest
from src.hr_reconciliation.hr_reconciliation.requests.mysql_request_repository import MySQLLeaveRequestRepository
from src.hr_reconciliation.hr_reconciliation.summary.service import MonthlyAggregator
from src.hr_reconciliation.hr_reconciliation.users.model import Employee
from src.hr_reconciliation.hr_reconciliation.workdays.model import Holiday, ReconciliationConfig


class FakeAttendance:
    def __init__(self, events, *, fail=False):
        self.events = list(events)
        self.fail = fail

    def list_events(self, *, badge, start_date, end_date):
        if self.fail:
            raise DataSourceError("attendance export unreachable", source="attendance")
        return [e for e in self.events if e.badge_key == badge and start_date <= e.work_date <= end_date]

    def list_events_on(self, work_date):
        return [e for e in self.events if e.work_date == work_date]


class FakeLeaves:
    def __init__(self, requests, *, fail=False, broken_for=()):
        self.requests = list(requests)
        self.fail = fail
        self.broken_for = set(broken_for)

    def list_for_employee(self, *, employee_id, status=None, start=None, end=None):
        if self.fail:
            raise DataSourceError("leave store unreachable", source="leave")
        if employee_id in self.broken_for:
            raise ValidationError("corrupt leave row")
        out = [r for r in self.requests if r.employee_id == employee_id]
        if status is not None:
            out = [r for r in out if r.status == status]
        if start is not None and end is not None:
            out = [r for r in out if r.intersects(start, end)]
        return out


class FakeHolidays:
    def __init__(self, holidays, *, fail=False):
        self.holidays = list(holidays)
        self.fail = fail

    def list_holidays(self, *, start, end):
        if self.fail:
            raise DataSourceError("holiday calendar unreachable", source="holidays")
        return [h for h in self.holidays if start <= h.holiday_date <= end]


EMP = Employee(employee_id="E1", badge="42", full_name="Dana Example", hourly_rate=25.0)

# March 2025 with the default Friday/Saturday weekend has 22 work days.
EVENTS = [
    AttendanceEvent("42", date(2025, 3, 4), "07:20", "16:20"),
    AttendanceEvent(" 42", date(2025, 3, 4), "12:00", "13:00"),
    AttendanceEvent("42", date(2025, 3, 5), "07:45", "16:00"),
    AttendanceEvent("42", date(2025, 3, 6), "??", None),
    AttendanceEvent("42", date(2025, 3, 8), "08:00", "12:00"),
    AttendanceEvent("77", date(2025, 3, 4), "07:00", "15:00"),
]
REQUESTS = [
    LeaveRequest("L1", "E1", date(2025, 2, 27), date(2025, 3, 2), LeaveStatus.APPROVED),
    LeaveRequest("L2", "E1", date(2025, 3, 10), date(2025, 3, 11), LeaveStatus.APPROVED),
    LeaveRequest("L3", "E1", date(2025, 3, 20), date(2025, 3, 20), LeaveStatus.PENDING),
    LeaveRequest("L4", "E1", date(2025, 4, 1), date(2025, 4, 2), LeaveStatus.REJECTED),
]
HOLIDAYS = [Holiday(date(2025, 3, 3), "Spring holiday")]


def _aggregator(*, attendance=None, leaves=None, holidays=None):
    return MonthlyAggregator(
        attendance or FakeAttendance(EVENTS),
        leaves or FakeLeaves(REQUESTS),
        holidays or FakeHolidays(HOLIDAYS),
        clock=lambda: datetime(2025, 3, 5, 18, 0),
    )


def test_summary_counts_presence_leave_and_work_days():
    summary = _aggregator().summarize(EMP, 2025, 3, config=ReconciliationConfig())

    assert summary.period.label == "2025-03"
    assert summary.present_days == 4
    assert summary.late_days == 1
    assert summary.worked_minutes == 540 + 495 + 240
    assert summary.worked_hours == 21.25
    assert summary.approved_leave_days == 4
    assert summary.approved_leave_application_count == 2
    assert [r.request_id for r in summary.other_leave_requests] == ["L3"]
    # 22 work days - 1 holiday - 3 approved leave work days (Mar 2, 10, 11)
    assert summary.working_days == 18
    assert summary.expected_minutes == 18 * 8 * 60
    # Saturday attendance is not subtracted from absences.
    assert summary.absent_days == 15
    assert summary.is_complete


def test_today_worked_minutes_only_for_completed_day_in_period():
    agg = _aggregator()

    assert agg.summarize(EMP, 2025, 3).today_worked_minutes == 495
    assert agg.summarize(EMP, 2025, 3, today=date(2025, 3, 6)).today_worked_minutes is None
    assert agg.summarize(EMP, 2025, 3, today=date(2025, 4, 1)).today_worked_minutes is None


def test_today_minutes_are_not_added_twice():
    summary = _aggregator().summarize(EMP, 2025, 3, today=date(2025, 3, 5))

    assert summary.worked_minutes == 1275


def test_attendance_failure_is_reported_not_zeroed_silently():
    summary = _aggregator(attendance=FakeAttendance(EVENTS, fail=True)).summarize(EMP, 2025, 3)

    assert not summary.is_complete
    assert summary.failed("attendance")
    assert summary.present_days == 0
    assert summary.absent_days is None
    assert summary.today_worked_minutes is None
    assert summary.working_days == 18
    assert summary.approved_leave_days == 4
    with pytest.raises(DataSourceError) as exc:
        summary.raise_for_failures()
    assert exc.value.source == "attendance"


def test_holiday_failure_keeps_attendance_half():
    summary = _aggregator(holidays=FakeHolidays(HOLIDAYS, fail=True)).summarize(EMP, 2025, 3)

    assert summary.failed("holidays")
    assert summary.present_days == 4
    assert summary.approved_leave_days == 4
    assert summary.working_days is None
    assert summary.absent_days is None
    assert summary.expected_minutes is None


def test_leave_failure_leaves_leave_counters_empty():
    summary = _aggregator(leaves=FakeLeaves(REQUESTS, fail=True)).summarize(EMP, 2025, 3)

    assert summary.failed("leave")
    assert summary.approved_leave_days == 0
    assert summary.other_leave_requests == ()
    assert summary.working_days is None
    assert summary.late_days == 1


def test_employee_without_data_is_complete_and_all_absent():
    other = Employee(employee_id="E9", badge="900")
    summary = _aggregator().summarize(other, 2025, 3)

    assert summary.is_complete
    assert summary.present_days == 0
    assert summary.working_days == 21
    assert summary.absent_days == 21


def test_invalid_month_is_rejected():
    with pytest.raises(ValidationError):
        _aggregator().summarize(EMP, 2025, 13)


def test_unreadable_leave_rows_keep_attendance_half():
    broken = Employee(employee_id="E2", badge="42")
    agg = _aggregator(leaves=FakeLeaves(REQUESTS, broken_for={"E2"}))

    result = agg.summarize_many([EMP, broken], 2025, 3)

    assert set(result.summaries) == {"E1", "E2"}
    assert result.summaries["E1"].is_complete
    e2 = result.summaries["E2"]
    assert e2.failed("leave")
    assert e2.present_days == 4
    assert e2.late_days == 1
    assert e2.working_days is None
    assert result.errors["E2"] == "leave: corrupt leave row"


def test_summarize_many_lists_incomplete_summaries_as_errors():
    agg = _aggregator(attendance=FakeAttendance(EVENTS, fail=True))

    result = agg.summarize_many([EMP], 2025, 3)

    assert "E1" in result.summaries
    assert result.errors["E1"].startswith("attendance:")


class RowsCursor:
    def __init__(self, rows_by_employee):
        self.rows_by_employee = rows_by_employee
        self.rows = []

    def execute(self, sql, params=()):
        self.rows = list(self.rows_by_employee.get(params[0], []))

    def fetchall(self):
        return self.rows

    def close(self):
        pass


class RowsConn:
    def __init__(self, rows_by_employee):
        self.rows_by_employee = rows_by_employee

    def cursor(self, dictionary=True):
        return RowsCursor(self.rows_by_employee)

    def commit(self):
        pass

    def rollback(self):
        pass

    def close(self):
        pass


class RowsFactory:
    def __init__(self, rows_by_employee):
        self.rows_by_employee = rows_by_employee

    def connect(self):
        return RowsConn(self.rows_by_employee)


def _leave_row(request_id, start, end, status):
    return {
        "request_id": request_id,
        "employee_id": "E2",
        "start_date": start,
        "end_date": end,
        "status": status,
        "leave_type": None,
    }


def test_bad_stored_leave_status_does_not_abort_batch():
    rows = {"E2": [_leave_row(7, date(2025, 3, 10), date(2025, 3, 11), "approved")]}
    leaves = MySQLLeaveRequestRepository(RowsFactory(rows))
    e2 = Employee(employee_id="E2", badge="42")
    e3 = Employee(employee_id="E3", badge="900")

    result = _aggregator(leaves=leaves).summarize_many([EMP, e2, e3], 2025, 3)

    assert set(result.summaries) == {"E1", "E2", "E3"}
    assert result.summaries["E1"].is_complete
    assert result.summaries["E3"].is_complete
    assert result.summaries["E2"].failed("leave")
    assert result.summaries["E2"].present_days == 4
    assert "approved" in result.errors["E2"]

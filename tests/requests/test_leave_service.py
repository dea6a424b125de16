from datetime import date

import pytest

from src.hr_reconciliation.hr_reconciliation.core.enums import LeaveStatus
from src.hr_reconciliation.hr_reconciliation.core.exceptions import ValidationError
from src.hr_reconciliation.hr_reconciliation.requests.model import LeaveRequest
from src.hr_reconciliation.hr_reconciliation.requests.service import LeaveService, approved_leave_dates
from src.hr_reconciliation.hr_reconciliation.workdays.model import Holiday, ReconciliationConfig, WeekendConfig


class FakeHolidays:
    def __init__(self, holidays):
        self.holidays = list(holidays)
        self.calls = []

    def list_holidays(self, *, start, end):
        self.calls.append((start, end))
        return [h for h in self.holidays if start <= h.holiday_date <= end]


def test_leave_request_rejects_end_before_start():
    with pytest.raises(ValidationError) as exc:
        LeaveRequest("L1", "E1", date(2025, 3, 5), date(2025, 3, 4), LeaveStatus.PENDING)

    assert exc.value.errors == {"end_date": "before start_date"}


def test_intersects_is_inclusive():
    req = LeaveRequest("L1", "E1", date(2025, 3, 5), date(2025, 3, 7), LeaveStatus.APPROVED)

    assert req.intersects(date(2025, 3, 7), date(2025, 3, 31))
    assert req.intersects(date(2025, 3, 1), date(2025, 3, 5))
    assert not req.intersects(date(2025, 3, 8), date(2025, 3, 31))


def test_approved_leave_dates_ignores_pending_and_rejected():
    requests = [
        LeaveRequest("L1", "E1", date(2025, 2, 28), date(2025, 3, 2), LeaveStatus.APPROVED),
        LeaveRequest("L2", "E1", date(2025, 3, 2), date(2025, 3, 3), LeaveStatus.APPROVED),
        LeaveRequest("L3", "E1", date(2025, 3, 10), date(2025, 3, 12), LeaveStatus.PENDING),
        LeaveRequest("L4", "E1", date(2025, 3, 14), date(2025, 3, 14), LeaveStatus.REJECTED),
    ]

    dates = approved_leave_dates(requests, date(2025, 3, 1), date(2025, 3, 31))

    assert dates == {date(2025, 3, 1), date(2025, 3, 2), date(2025, 3, 3)}


def test_working_days_skip_weekend_and_holidays():
    holidays = FakeHolidays([Holiday(date(2025, 3, 4), "Holiday")])
    svc = LeaveService(holidays)

    # Sun 2 .. Sat 8 March 2025: Fri/Sat weekend, Tuesday holiday.
    assert svc.working_days(date(2025, 3, 2), date(2025, 3, 8)) == 4
    assert holidays.calls == [(date(2025, 3, 2), date(2025, 3, 8))]


def test_working_days_with_custom_weekend():
    svc = LeaveService(FakeHolidays([]))
    config = ReconciliationConfig(weekend=WeekendConfig.of([0, 6]))

    assert svc.working_days(date(2025, 3, 1), date(2025, 3, 9), config=config) == 5


def test_working_days_rejects_reversed_range():
    svc = LeaveService(FakeHolidays([]))

    with pytest.raises(ValidationError):
        svc.working_days(date(2025, 3, 9), date(2025, 3, 1))

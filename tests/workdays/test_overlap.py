from datetime import date, datetime

from src.hr_reconciliation.hr_reconciliation.workdays.overlap import covered_days, overlap_days

FEB_START = date(2024, 2, 1)
FEB_END = date(2024, 2, 29)


def test_range_straddling_period_start_is_clipped():
    assert overlap_days(date(2024, 1, 28), date(2024, 2, 3), FEB_START, FEB_END) == 3


def test_range_inside_period_counts_both_ends():
    assert overlap_days(date(2024, 2, 10), date(2024, 2, 10), FEB_START, FEB_END) == 1
    assert overlap_days(date(2024, 2, 10), date(2024, 2, 14), FEB_START, FEB_END) == 5


def test_range_covering_whole_period():
    assert overlap_days(date(2024, 1, 1), date(2024, 12, 31), FEB_START, FEB_END) == 29


def test_disjoint_range_is_zero():
    assert overlap_days(date(2024, 3, 1), date(2024, 3, 5), FEB_START, FEB_END) == 0
    assert overlap_days(date(2024, 1, 1), date(2024, 1, 31), FEB_START, FEB_END) == 0


def test_datetimes_collapse_to_calendar_days():
    assert overlap_days(datetime(2024, 2, 28, 23, 30), datetime(2024, 3, 2, 1, 0), FEB_START, FEB_END) == 2


def test_covered_days_matches_overlap_count():
    days = covered_days(date(2024, 1, 30), date(2024, 2, 2), FEB_START, FEB_END)

    assert days == {date(2024, 2, 1), date(2024, 2, 2)}
    assert covered_days(date(2024, 3, 1), date(2024, 3, 2), FEB_START, FEB_END) == set()

from src.hr_reconciliation.hr_reconciliation.attendance.factory import AttendanceStrategyFactory
from src.hr_reconciliation.hr_reconciliation.attendance.strategies.late_strategy import LateStrategy
from src.hr_reconciliation.hr_reconciliation.attendance.strategies.normal_strategy import NormalStrategy
from src.hr_reconciliation.hr_reconciliation.attendance.strategies.unparsed_strategy import UnparsedStrategy
from src.hr_reconciliation.hr_reconciliation.core.enums import AttendanceStatus


def test_factory_checkin_exactly_at_cutoff_is_on_time():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(check_in_minutes=450, cutoff_minutes=450)

    assert isinstance(strategy, NormalStrategy)


def test_factory_checkin_late_after_cutoff():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(check_in_minutes=451, cutoff_minutes=450)

    assert isinstance(strategy, LateStrategy)
    decision = strategy.decide_checkin(check_in_minutes=451, cutoff_minutes=450)
    assert decision.status == AttendanceStatus.LATE
    assert decision.late is True
    assert decision.note == "Late by 1 min"


def test_factory_unreadable_checkin_is_unknown_not_late():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(check_in_minutes=None, cutoff_minutes=450)

    assert isinstance(strategy, UnparsedStrategy)
    decision = strategy.decide_checkin(check_in_minutes=None, cutoff_minutes=450)
    assert decision.status == AttendanceStatus.UNKNOWN
    assert decision.late is False

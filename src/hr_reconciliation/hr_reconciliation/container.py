from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.service import PayrollReportService, PayrollService
from .requests.mysql_request_repository import MySQLLeaveRequestRepository
from .requests.service import LeaveService
from .summary.service import MonthlyAggregator
from .users.mysql_employee_repository import MySQLEmployeeDirectory
from .workdays.mysql_settings_repository import MySQLHolidayCalendar, MySQLSettingsRepository
from .workdays.service import SettingsService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeDirectory
    attendance_repo: MySQLAttendanceRepository
    leaves_repo: MySQLLeaveRequestRepository
    holidays_repo: MySQLHolidayCalendar
    settings_repo: MySQLSettingsRepository
    payroll_repo: MySQLPayrollRepository

    settings_service: SettingsService
    attendance_service: AttendanceService
    leave_service: LeaveService
    monthly_aggregator: MonthlyAggregator
    payroll_service: PayrollService
    payroll_report_service: PayrollReportService


def build_container(*, db_config: dict, engine_settings: dict | None = None) -> Container:
    """Wire repositories and services.

    ``engine_settings`` may carry DEFAULT_LATE_CUTOFF, DEFAULT_WEEKEND_DAYS and
    STANDARD_WORKDAY_HOURS from the settings module.
    """
    engine_settings = engine_settings or {}
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    employees_repo = MySQLEmployeeDirectory(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    leaves_repo = MySQLLeaveRequestRepository(conn)
    holidays_repo = MySQLHolidayCalendar(conn)
    settings_repo = MySQLSettingsRepository(conn)
    payroll_repo = MySQLPayrollRepository(conn)

    factory = AttendanceStrategyFactory()
    settings_kwargs = {}
    if "DEFAULT_LATE_CUTOFF" in engine_settings:
        settings_kwargs["default_cutoff_minutes"] = int(engine_settings["DEFAULT_LATE_CUTOFF"])
    if "DEFAULT_WEEKEND_DAYS" in engine_settings:
        settings_kwargs["default_weekend_days"] = tuple(engine_settings["DEFAULT_WEEKEND_DAYS"])
    if "STANDARD_WORKDAY_HOURS" in engine_settings:
        settings_kwargs["default_standard_hours"] = float(engine_settings["STANDARD_WORKDAY_HOURS"])

    settings_service = SettingsService(settings_repo, **settings_kwargs)
    attendance_service = AttendanceService(attendance_repo, strategy_factory=factory)
    leave_service = LeaveService(holidays_repo)
    monthly_aggregator = MonthlyAggregator(attendance_repo, leaves_repo, holidays_repo, strategy_factory=factory)
    payroll_service = PayrollService(payroll_repo)
    payroll_report_service = PayrollReportService(payroll_repo, leaves_repo)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        holidays_repo=holidays_repo,
        settings_repo=settings_repo,
        payroll_repo=payroll_repo,
        settings_service=settings_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        monthly_aggregator=monthly_aggregator,
        payroll_service=payroll_service,
        payroll_report_service=payroll_report_service,
    )

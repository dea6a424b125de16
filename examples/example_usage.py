"""Example: month-end reconciliation and payroll through the service layer.

Usage:
    APP_ENV=development python -m examples.example_usage 2025-03
    APP_ENV=development python -m examples.example_usage 2025-03 E001
"""

import sys

from src.hr_reconciliation.hr_reconciliation.common.period import Period
from src.hr_reconciliation.hr_reconciliation.core.enums import EmployeeStatus
from src.hr_reconciliation.hr_reconciliation.main import create_container


def run_one(container, period, employee_id):
    config = container.settings_service.load_config()
    employee = container.employees_repo.get_by_id(employee_id)
    if employee is None:
        raise SystemExit(f"unknown employee {employee_id}")

    summary = container.monthly_aggregator.summarize(employee, period.year, period.month, config=config)
    summary.raise_for_failures()
    print(summary)

    inputs = container.payroll_service.prepare_inputs(employee, summary)
    print(
        container.payroll_service.recalculate(
            employee_id=employee.employee_id,
            period=period,
            hourly_rate=inputs.hourly_rate,
            total_work_hours=inputs.total_work_hours,
        )
    )


def run_month(container, period):
    config = container.settings_service.load_config()
    employees = container.employees_repo.list_employees(status=EmployeeStatus.ACTIVE)

    batch = container.monthly_aggregator.summarize_many(employees, period.year, period.month, config=config)
    payroll = container.payroll_service.run_month(employees, batch)
    for employee_id, record in payroll.records.items():
        print(employee_id, record.net_salary_final, "(override)" if record.is_overridden else "")
    for employee_id, error in payroll.errors.items():
        print(employee_id, "FAILED:", error)

    report = container.payroll_report_service.build_annual_report(period.year, employees)
    for row in report.rows:
        print(row.employee_id, row.full_name, row.total_net_salary, row.total_leave_days)


def main():
    period = Period.parse(sys.argv[1])
    container = create_container()
    if len(sys.argv) > 2:
        run_one(container, period, sys.argv[2])
    else:
        run_month(container, period)


if __name__ == "__main__":
    main()

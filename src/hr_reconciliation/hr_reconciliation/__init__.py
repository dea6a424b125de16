"""HR reconciliation package.

Feature modules (attendance, requests, workdays, summary, payroll, ...) turn raw
attendance punches, leave requests and holiday calendars into monthly
aggregates and payroll records. Storage is reached only through repository
protocols; MySQL adapters live beside each protocol.
"""

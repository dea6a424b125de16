from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Lateness classification of one employee-day."""

    ON_TIME = "ON_TIME"
    LATE = "LATE"
    ABSENT = "ABSENT"
    UNKNOWN = "UNKNOWN"


class LeaveStatus(str, Enum):
    """Approval state of a leave request, as stored by the approval workflow."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    ON_LEAVE = "On Leave"
    DEACTIVATED = "Deactivated"

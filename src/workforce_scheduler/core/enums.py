from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles stored on the worker record."""

    ADMIN = "Admin"
    MANAGER = "Manager"
    WORKER = "Worker"


class WorkerStatus(str, Enum):
    """Employment lifecycle status of a worker."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    ON_LEAVE = "on-leave"


class AttendanceStatus(str, Enum):
    """Daily attendance status; only PRESENT and HALF_DAY grant task capacity."""

    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half-day"
    ON_LEAVE = "on-leave"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    ON_HOLD = "on-hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced worker, project or task does not exist."""


class AssignmentError(ValidationError):
    """Raised when a task's worker assignment is rejected."""


class LifecycleViolation(AssignmentError):
    """Raised when a worker is not active for the task date."""


class AttendanceViolation(AssignmentError):
    """Raised when a worker has no usable attendance for the task date."""


class CapacityViolation(AssignmentError):
    """Raised on time overlap, half-day exhaustion or insufficient hours."""


class BoundaryViolation(AssignmentError):
    """Raised when a task date falls after its project's end date."""

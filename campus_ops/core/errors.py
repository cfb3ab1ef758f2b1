# campus_ops/core/errors.py
# Typed failures raised by every workflow operation. Each carries a code and a
# category; to_dict() is the shape handed to the request layer.
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """High-level error categories for the request layer to route on."""
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    INVALID_STATE = "invalid_state"
    VALIDATION = "validation"
    PERMISSION = "permission"


class CampusOpsError(Exception):
    """Base exception for all campus operations errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "details": self.details,
            }
        }


class NotFoundError(CampusOpsError):
    """Referenced facility, booking, ticket, user or comment does not exist."""
    def __init__(self, resource: str, resource_id: int | str | None = None):
        msg = f"{resource}"
        if resource_id is not None:
            msg += f" id={resource_id}"
        msg += " not found"
        super().__init__(
            msg, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            {"resource": resource, "resource_id": resource_id},
        )
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(CampusOpsError):
    """Candidate interval overlaps an active booking on the same facility and date."""
    def __init__(self, booking):
        self.conflicting_id = booking.id
        self.booking_date = booking.booking_date
        self.start_time = booking.start_time
        self.end_time = booking.end_time
        self.status = booking.status
        super().__init__(
            f"Scheduling conflict: facility is already booked from "
            f"{booking.start_time:%H:%M} to {booking.end_time:%H:%M} on "
            f"{booking.booking_date} (booking id={booking.id}, status={booking.status.value})",
            "BOOKING_CONFLICT", ErrorCategory.CONFLICT,
            {
                "conflicting_id": booking.id,
                "start_time": booking.start_time.isoformat(),
                "end_time": booking.end_time.isoformat(),
                "status": booking.status.value,
            },
        )


class InvalidStateError(CampusOpsError):
    """Requested transition is not permitted from the entity's current status."""
    def __init__(self, resource: str, current: str, action: str, reason: str | None = None):
        msg = f"Cannot {action} {resource} in status {current}"
        if reason:
            msg += f": {reason}"
        super().__init__(
            msg, "INVALID_STATE", ErrorCategory.INVALID_STATE,
            {"resource": resource, "current": current, "action": action},
        )
        self.resource = resource
        self.current = current
        self.action = action


class InvalidArgumentError(CampusOpsError):
    """Input was well-formed but violates a business rule."""
    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.VALIDATION,
            {"field": field} if field else None,
        )
        self.field = field


class ForbiddenError(CampusOpsError):
    """Caller lacks the ownership or role the operation requires."""
    def __init__(self, message: str):
        super().__init__(message, "FORBIDDEN", ErrorCategory.PERMISSION)

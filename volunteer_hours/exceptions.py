"""Custom exceptions and error handling for the volunteer hour tracker.

Every error carries a user-facing message, a machine-readable code and an
HTTP status so the API layer can render it without further translation.
"""
from typing import Optional, Dict, Any


class HoursTrackingError(Exception):
    """Base class for errors with user-friendly messages."""

    http_status = 500

    def __init__(self, message: str, error_code: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize error.

        Args:
            message: User-friendly error message
            error_code: Machine-readable error code
            details: Optional additional error details
        """
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary format for API responses.

        Returns:
            Dictionary with error information
        """
        return {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details
            }
        }


class ValidationError(HoursTrackingError):
    """Malformed or missing input."""

    http_status = 400


class ConflictError(HoursTrackingError):
    """The requested change conflicts with the current state of a record."""

    http_status = 409


class NotFoundError(HoursTrackingError):
    """A referenced record does not exist."""

    http_status = 404


class TransientNetworkError(HoursTrackingError):
    """Timeout or connection failure talking to storage. Safe to retry."""

    http_status = 503

    def __init__(self, message: str = "The request failed, please try again.", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="TRANSIENT_NETWORK_ERROR",
            details=details
        )


class MissingFieldError(ValidationError):
    """Error raised when a required field is missing."""

    def __init__(self, field_name: str):
        """
        Initialize missing field error.

        Args:
            field_name: Name of the missing field
        """
        field_names = {
            "user_id": "User ID",
            "admin_id": "Admin ID",
            "task_description": "Task description",
            "description": "Description",
            "date": "Date",
            "duration_minutes": "Duration",
        }

        field_display = field_names.get(field_name, field_name)
        super().__init__(
            message=f"{field_display} is required.",
            error_code="MISSING_FIELD",
            details={"field_name": field_name}
        )


class InvalidCategoryError(ValidationError):
    """Error raised when a category is not one of the fixed work types."""

    def __init__(self, category: Any, allowed: list):
        super().__init__(
            message=f"Unknown category: {category}. Choose one of: {', '.join(allowed)}.",
            error_code="INVALID_CATEGORY",
            details={"category": category, "allowed": allowed}
        )


class InvalidDateError(ValidationError):
    """Error raised when a date value cannot be parsed."""

    def __init__(self, value: Any, reason: str):
        super().__init__(
            message=f"Invalid date: {value}\n{reason}",
            error_code="INVALID_DATE",
            details={"value": str(value), "reason": reason}
        )


class InvalidRangeError(ValidationError):
    """Error raised when a value is outside the valid range."""

    def __init__(self, field_name: str, value: Any, min_value: Any, max_value: Any = None):
        """
        Initialize invalid range error.

        Args:
            field_name: Name of the field
            value: The invalid value
            min_value: Minimum valid value (exclusive)
            max_value: Optional maximum valid value
        """
        if max_value is None:
            message = f"{field_name} must be greater than {min_value}.\nGot: {value}"
        else:
            message = f"{field_name} must be between {min_value} and {max_value}.\nGot: {value}"

        super().__init__(
            message=message,
            error_code="INVALID_RANGE",
            details={
                "field_name": field_name,
                "value": value,
                "min_value": min_value,
                "max_value": max_value
            }
        )


class ActiveShiftExistsError(ConflictError):
    """Error raised when checking in while another shift is still active."""

    def __init__(self, user_id: str, shift_id: Optional[str] = None):
        super().__init__(
            message="An active shift already exists. Check out before starting another.",
            error_code="ACTIVE_SHIFT_EXISTS",
            details={"user_id": user_id, "shift_id": shift_id}
        )


class InvalidStatusTransitionError(ConflictError):
    """Error raised when reviewing a manual log that is no longer pending."""

    def __init__(self, current_status: str, attempted_action: str):
        """
        Initialize invalid status transition error.

        Args:
            current_status: Current status of the log
            attempted_action: Action that was attempted ("approve" or "reject")
        """
        message = (
            f"This log has already been reviewed.\n"
            f"Current status: {current_status}\n"
            f"Only pending logs can be {attempted_action}d."
        )

        super().__init__(
            message=message,
            error_code="INVALID_STATUS_TRANSITION",
            details={
                "current_status": current_status,
                "attempted_action": attempted_action
            }
        )


class DuplicateRecordError(ConflictError):
    """A write violated a storage-level uniqueness constraint."""

    def __init__(self, table: str, constraint: Optional[str] = None):
        super().__init__(
            message="A conflicting record already exists.",
            error_code="DUPLICATE_RECORD",
            details={"table": table, "constraint": constraint}
        )


class ResourceNotFoundError(NotFoundError):
    """Error raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str):
        """
        Initialize resource not found error.

        Args:
            resource_type: Type of resource (e.g., "shift", "manual_log", "profile")
            resource_id: ID of the resource
        """
        resource_types = {
            "profile": "Profile",
            "shift": "Shift",
            "manual_log": "Manual log",
        }

        resource_display = resource_types.get(resource_type, resource_type)
        super().__init__(
            message=f"{resource_display} not found. (ID: {resource_id})",
            error_code="RESOURCE_NOT_FOUND",
            details={
                "resource_type": resource_type,
                "resource_id": resource_id
            }
        )


def format_error_for_api(error: HoursTrackingError) -> Dict[str, Any]:
    """
    Format error for API response.

    Args:
        error: Error to format

    Returns:
        Dictionary suitable for JSON API response
    """
    return error.to_dict()

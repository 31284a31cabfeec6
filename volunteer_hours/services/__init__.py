"""Business logic services package."""
from volunteer_hours.services.shift_service import ShiftService
from volunteer_hours.services.manual_log_service import ManualLogService
from volunteer_hours.services.progress_service import ProgressService, ProgressSnapshot

__all__ = [
    "ShiftService",
    "ManualLogService",
    "ProgressService",
    "ProgressSnapshot",
]

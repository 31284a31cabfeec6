"""Database models package."""
from volunteer_hours.models.category import Category, CATEGORY_LABELS, category_label
from volunteer_hours.models.profile import Profile, UserRole, DEFAULT_TOTAL_GOAL
from volunteer_hours.models.shift import Shift, ShiftStatus
from volunteer_hours.models.manual_log import ManualLog, ManualLogStatus

__all__ = [
    "Category",
    "CATEGORY_LABELS",
    "category_label",
    "Profile",
    "UserRole",
    "DEFAULT_TOTAL_GOAL",
    "Shift",
    "ShiftStatus",
    "ManualLog",
    "ManualLogStatus",
]

"""Progress accounting: hour totals and completion against a goal."""
import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional

from volunteer_hours.config import settings
from volunteer_hours.exceptions import InvalidRangeError, ResourceNotFoundError
from volunteer_hours.models import DEFAULT_TOTAL_GOAL, ManualLogStatus, ShiftStatus
from volunteer_hours.records import Record, RecordStore
from volunteer_hours.services.manual_log_service import ManualLogService
from volunteer_hours.services.shift_service import ShiftService


logger = logging.getLogger(__name__)


STUDENTS_SUMMARY_PROCEDURE = "get_all_students_summary"


@dataclass(frozen=True)
class ProgressSnapshot:
    """Derived hour totals for one user. Recomputed on every request."""
    shift_hours: float
    approved_manual_hours: float
    total_hours: float
    progress_percent: float
    pending_logs: int
    goal: float
    
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def coerce_minutes(value: Any) -> Optional[float]:
    """
    Read a stored duration as float minutes.
    
    Storage may hand back numbers, Decimals or numeric strings. Missing,
    zero, negative and non-numeric values return None so callers skip them.
    """
    if value is None or value == "":
        return None
    try:
        minutes = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(minutes) or minutes <= 0:
        return None
    return minutes


def sum_minutes(records: Iterable[Record], status: str) -> float:
    """Sum usable durations of the records with the given status."""
    total = 0.0
    for record in records:
        if record.get("status") != status:
            continue
        minutes = coerce_minutes(record.get("duration_minutes"))
        if minutes is not None:
            total += minutes
    return total


class ProgressService:
    """Service computing progress snapshots and admin summaries."""
    
    def __init__(self, store: RecordStore):
        """
        Initialize progress service.
        
        Args:
            store: Record store
        """
        self.store = store
        self.shifts = ShiftService(store)
        self.manual_logs = ManualLogService(store)
    
    def get_profile(self, user_id: str) -> Record:
        """
        Get a user's profile.
        
        Raises:
            ResourceNotFoundError: If no profile exists for user_id
        """
        profile = self.store.select_one("profiles", filters={"id": user_id})
        if profile is None:
            raise ResourceNotFoundError("profile", user_id)
        return profile
    
    def calculate_progress(self, user_id: str, goal: float = DEFAULT_TOTAL_GOAL) -> ProgressSnapshot:
        """
        Compute the user's progress toward an hour goal.
        
        Completed shifts and approved manual logs count toward the total;
        durations that are missing, zero or non-numeric are skipped in both
        streams. The percentage is capped at 100, total_hours is not.
        
        Args:
            user_id: ID of the user
            goal: Hour goal (must be positive)
            
        Returns:
            ProgressSnapshot
            
        Raises:
            InvalidRangeError: If goal is not positive
        """
        if goal is None or not goal > 0:
            raise InvalidRangeError("goal", goal, 0)
        
        shifts = self.shifts.get_shifts(user_id)
        logs = self.manual_logs.get_manual_logs(user_id)
        
        shift_minutes = sum_minutes(shifts, ShiftStatus.COMPLETED.value)
        approved_minutes = sum_minutes(logs, ManualLogStatus.APPROVED.value)
        pending_logs = sum(1 for log in logs if log.get("status") == ManualLogStatus.PENDING.value)
        
        total_minutes = shift_minutes + approved_minutes
        total_hours = total_minutes / 60
        progress_percent = min(total_hours / goal * 100, 100)
        
        return ProgressSnapshot(
            shift_hours=shift_minutes / 60,
            approved_manual_hours=approved_minutes / 60,
            total_hours=total_hours,
            progress_percent=progress_percent,
            pending_logs=pending_logs,
            goal=goal,
        )
    
    def calculate_progress_for_profile(self, profile: Record) -> ProgressSnapshot:
        """Progress against the profile's own goal, or the configured default."""
        goal = profile.get("total_goal") or settings.default_hour_goal
        return self.calculate_progress(profile["id"], goal)
    
    def get_all_students_summary(self) -> List[Record]:
        """Per-student totals as computed by the aggregation procedure."""
        rows = self.store.call(STUDENTS_SUMMARY_PROCEDURE) or []
        logger.info(f"Loaded summary for {len(rows)} students")
        return rows

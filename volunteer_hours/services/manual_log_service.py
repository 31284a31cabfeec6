"""Manual hour log service: submission and admin review."""
import logging
import math
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

from volunteer_hours.config import settings
from volunteer_hours.exceptions import (
    InvalidDateError,
    InvalidRangeError,
    InvalidStatusTransitionError,
    MissingFieldError,
    ResourceNotFoundError,
)
from volunteer_hours.models import ManualLogStatus
from volunteer_hours.records import Record, RecordStore
from volunteer_hours.services.shift_service import validate_category
from volunteer_hours.timeutils import utcnow


logger = logging.getLogger(__name__)


UNKNOWN_USER_NAME = "unknown"


def _parse_log_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        raise MissingFieldError("date")
    try:
        return date_parser.isoparse(str(value)).date()
    except ValueError:
        raise InvalidDateError(value, "Use the YYYY-MM-DD format.")


def _parse_duration(value: Any) -> float:
    if value is None or value == "":
        raise MissingFieldError("duration_minutes")
    try:
        minutes = float(value)
    except (TypeError, ValueError):
        raise InvalidRangeError("duration_minutes", value, 0)
    if not math.isfinite(minutes) or minutes <= 0:
        raise InvalidRangeError("duration_minutes", value, 0)
    return minutes


class ManualLogService:
    """Service for handling manual log operations."""
    
    TABLE = "manual_logs"
    
    def __init__(self, store: RecordStore, allow_re_review: Optional[bool] = None):
        """
        Initialize manual log service.
        
        Args:
            store: Record store
            allow_re_review: Allow reviewing logs that are no longer pending
                (defaults to the allow_log_re_review setting)
        """
        self.store = store
        if allow_re_review is None:
            allow_re_review = settings.allow_log_re_review
        self.allow_re_review = allow_re_review
    
    def submit_manual_log(self, user_id: str, payload: Dict[str, Any]) -> Record:
        """
        Submit retroactively reported hours for review.
        
        Only date, duration, description and category are read from the
        payload. The status is always pending.
        
        Args:
            user_id: ID of the submitting user
            payload: Dict with date, duration_minutes (or durationMinutes),
                description and category
            
        Returns:
            The created log record
        """
        if not user_id:
            raise MissingFieldError("user_id")
        
        log_date = _parse_log_date(payload.get("date"))
        duration = payload.get("duration_minutes", payload.get("durationMinutes"))
        minutes = _parse_duration(duration)
        description = (payload.get("description") or "").strip()
        if not description:
            raise MissingFieldError("description")
        category = validate_category(payload.get("category"))
        
        log = self.store.insert(self.TABLE, {
            "user_id": user_id,
            "date": log_date,
            "duration_minutes": minutes,
            "description": description,
            "category": category.value,
            "status": ManualLogStatus.PENDING.value,
        })
        
        logger.info(f"Manual log {log['id']} submitted by {user_id}: {minutes} minutes on {log_date}")
        return log
    
    def get_manual_logs(self, user_id: str) -> List[Record]:
        """All of the user's manual logs, newest first."""
        return self.store.select(
            self.TABLE,
            filters={"user_id": user_id},
            order_by="created_at",
            descending=True
        ) or []
    
    def _review(self, log_id: str, admin_id: str, status: ManualLogStatus, action: str) -> Record:
        if not admin_id:
            raise MissingFieldError("admin_id")
        
        values = {
            "status": status.value,
            "reviewed_by": admin_id,
            "reviewed_at": utcnow(),
        }
        
        if self.allow_re_review:
            log = self.store.update(self.TABLE, filters={"id": log_id}, values=values)
        else:
            current = self.store.select_one(self.TABLE, filters={"id": log_id})
            if current is None:
                raise ResourceNotFoundError("manual_log", log_id)
            if current["status"] != ManualLogStatus.PENDING.value:
                logger.warning(f"Refused to {action} log {log_id}: already {current['status']}")
                raise InvalidStatusTransitionError(current["status"], action)
            
            try:
                log = self.store.update(
                    self.TABLE,
                    filters={"id": log_id, "status": ManualLogStatus.PENDING.value},
                    values=values
                )
            except ResourceNotFoundError:
                # Reviewed by someone else between the read and the write
                latest = self.store.select_one(self.TABLE, filters={"id": log_id})
                latest_status = latest["status"] if latest else "unknown"
                raise InvalidStatusTransitionError(latest_status, action)
        
        logger.info(f"Manual log {log_id} {status.value} by {admin_id}")
        return log
    
    def approve_log(self, log_id: str, admin_id: str) -> Record:
        """
        Approve a manual log.
        
        Args:
            log_id: ID of the log
            admin_id: ID of the reviewing admin
            
        Returns:
            The updated log record
            
        Raises:
            ResourceNotFoundError: If the log does not exist
            InvalidStatusTransitionError: If the log was already reviewed
        """
        return self._review(log_id, admin_id, ManualLogStatus.APPROVED, "approve")
    
    def reject_log(self, log_id: str, admin_id: str) -> Record:
        """Reject a manual log. Same contract as approve_log."""
        return self._review(log_id, admin_id, ManualLogStatus.REJECTED, "reject")
    
    def get_all_pending_logs(self) -> List[Record]:
        """
        All pending logs across users, oldest first, with the submitter's name.
        
        Returns:
            Log records with an added user_name key
        """
        logs = self.store.select(
            self.TABLE,
            filters={"status": ManualLogStatus.PENDING.value},
            order_by="created_at",
            descending=False,
            embed="profiles"
        ) or []
        
        result = []
        for log in logs:
            profile = log.get("profiles") or {}
            result.append({**log, "user_name": profile.get("full_name") or UNKNOWN_USER_NAME})
        return result

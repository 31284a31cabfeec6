"""Shift lifecycle service: clocking in and out."""
import logging
from typing import List, Optional

from volunteer_hours.exceptions import (
    ActiveShiftExistsError,
    DuplicateRecordError,
    InvalidCategoryError,
    MissingFieldError,
)
from volunteer_hours.models import Category, ShiftStatus
from volunteer_hours.records import Record, RecordStore
from volunteer_hours.timeutils import utcnow


logger = logging.getLogger(__name__)


def validate_category(category) -> Category:
    """Return the Category for a raw value or raise InvalidCategoryError."""
    try:
        return Category(category)
    except ValueError:
        raise InvalidCategoryError(category, [c.value for c in Category])


class ShiftService:
    """Service for handling shift operations."""
    
    TABLE = "shifts"
    
    def __init__(self, store: RecordStore):
        """
        Initialize shift service.
        
        Args:
            store: Record store
        """
        self.store = store
    
    def get_active_shift(self, user_id: str) -> Optional[Record]:
        """
        Get the user's active shift.
        
        Args:
            user_id: ID of the user
            
        Returns:
            The active shift record, or None when the user is not clocked in
        """
        shifts = self.store.select(
            self.TABLE,
            filters={"user_id": user_id, "status": ShiftStatus.ACTIVE.value}
        )
        return shifts[0] if shifts else None
    
    def check_in(self, user_id: str, category: str, task_description: str) -> Record:
        """
        Start a new shift for the user.
        
        The active-shift lookup runs first and no write is attempted when it
        finds one. The storage uniqueness constraint covers the window between
        the lookup and the insert.
        
        Args:
            user_id: ID of the user
            category: Work category
            task_description: What the user is working on
            
        Returns:
            The created shift record
            
        Raises:
            MissingFieldError: If user_id or task_description is empty
            InvalidCategoryError: If category is not a known work type
            ActiveShiftExistsError: If the user already has an active shift
        """
        if not user_id:
            raise MissingFieldError("user_id")
        category = validate_category(category)
        task_description = (task_description or "").strip()
        if not task_description:
            raise MissingFieldError("task_description")
        
        existing = self.get_active_shift(user_id)
        if existing:
            logger.warning(f"Check-in refused for {user_id}: shift {existing['id']} still active")
            raise ActiveShiftExistsError(user_id, existing["id"])
        
        try:
            shift = self.store.insert(self.TABLE, {
                "user_id": user_id,
                "category": category.value,
                "task_description": task_description,
                "start_time": utcnow(),
                "status": ShiftStatus.ACTIVE.value,
            })
        except DuplicateRecordError:
            logger.warning(f"Concurrent check-in for {user_id} lost to an existing active shift")
            raise ActiveShiftExistsError(user_id)
        
        logger.info(f"User {user_id} checked in: shift {shift['id']} ({category.value})")
        return shift
    
    def check_out(self, shift_id: str) -> Record:
        """
        Close a shift.
        
        Sets the end time to now and requests completion; the storage layer
        computes the duration. Repeated check-outs overwrite the end time.
        
        Args:
            shift_id: ID of the shift
            
        Returns:
            The updated shift record including duration_minutes
            
        Raises:
            ResourceNotFoundError: If the shift does not exist
        """
        shift = self.store.update(
            self.TABLE,
            filters={"id": shift_id},
            values={"end_time": utcnow(), "status": ShiftStatus.COMPLETED.value}
        )
        logger.info(f"Shift {shift_id} checked out after {shift.get('duration_minutes')} minutes")
        return shift
    
    def get_shifts(self, user_id: str) -> List[Record]:
        """All of the user's shifts, newest start first."""
        return self.store.select(
            self.TABLE,
            filters={"user_id": user_id},
            order_by="start_time",
            descending=True
        ) or []

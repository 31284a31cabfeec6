"""Shift model for clocked volunteer work."""
from sqlalchemy import Column, String, Text, Boolean, Numeric, DateTime, ForeignKey, UniqueConstraint, event
from sqlalchemy.orm import relationship
from decimal import Decimal, ROUND_HALF_UP
import enum
import uuid
from volunteer_hours.database import Base
from volunteer_hours.models.category import Category
from volunteer_hours.models.record import RecordMixin, enum_column_type
from volunteer_hours.timeutils import utcnow


class ShiftStatus(str, enum.Enum):
    """Shift status enumeration."""
    ACTIVE = "active"
    COMPLETED = "completed"


class Shift(RecordMixin, Base):
    """A continuous block of clocked-in volunteer work."""
    
    __tablename__ = "shifts"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    category = Column(enum_column_type(Category), nullable=False)
    task_description = Column(Text, nullable=False)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=True)
    status = Column(enum_column_type(ShiftStatus), nullable=False, default=ShiftStatus.ACTIVE, index=True)
    duration_minutes = Column(Numeric(10, 2), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    # True while active, NULL once completed; NULLs never collide
    active_lock = Column(Boolean, nullable=True)
    
    # Unique constraint: one active shift per user
    __table_args__ = (
        UniqueConstraint('user_id', 'active_lock', name='uq_shift_user_active'),
    )
    
    private_columns = ('active_lock',)
    
    # Relationships
    profile = relationship("Profile", back_populates="shifts")
    
    def __repr__(self) -> str:
        return f"<Shift(id={self.id}, user_id={self.user_id}, status={self.status})>"
    
    def validate(self) -> None:
        """Validate shift data."""
        if not self.user_id:
            raise ValueError("User ID is required")
        if not self.category:
            raise ValueError("Category is required")
        if not self.task_description:
            raise ValueError("Task description is required")
        if not self.start_time:
            raise ValueError("Start time is required")
        if self.end_time is not None and self.end_time < self.start_time:
            raise ValueError("End time must not be before start time")


def compute_duration_minutes(start_time, end_time) -> Decimal:
    """Minutes between two timestamps, rounded to two decimals."""
    seconds = Decimal(str((end_time - start_time).total_seconds()))
    return (seconds / Decimal(60)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


@event.listens_for(Shift, "before_insert")
@event.listens_for(Shift, "before_update")
def complete_shift_on_end_time(mapper, connection, target: Shift) -> None:
    """Storage-side completion: an end time closes the shift and fixes its duration."""
    if target.end_time is not None:
        target.status = ShiftStatus.COMPLETED
        target.duration_minutes = compute_duration_minutes(target.start_time, target.end_time)
    
    status = ShiftStatus(target.status or ShiftStatus.ACTIVE)
    target.active_lock = True if status == ShiftStatus.ACTIVE else None

"""Manual log model for retroactively reported hours."""
from sqlalchemy import Column, String, Text, Date, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship
import enum
import uuid
from volunteer_hours.database import Base
from volunteer_hours.models.category import Category
from volunteer_hours.models.record import RecordMixin, enum_column_type
from volunteer_hours.timeutils import utcnow


class ManualLogStatus(str, enum.Enum):
    """Manual log status enumeration."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ManualLog(RecordMixin, Base):
    """Self-reported block of hours awaiting admin review."""
    
    __tablename__ = "manual_logs"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    duration_minutes = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(enum_column_type(Category), nullable=False)
    status = Column(enum_column_type(ManualLogStatus), nullable=False, default=ManualLogStatus.PENDING, index=True)
    reviewed_by = Column(String(36), ForeignKey("profiles.id"), nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    
    # Relationships
    profile = relationship("Profile", back_populates="manual_logs", foreign_keys=[user_id])
    reviewer = relationship("Profile", foreign_keys=[reviewed_by])
    
    def __repr__(self) -> str:
        return f"<ManualLog(id={self.id}, user_id={self.user_id}, date={self.date}, status={self.status})>"
    
    def validate(self) -> None:
        """Validate manual log data."""
        if not self.user_id:
            raise ValueError("User ID is required")
        if not self.date:
            raise ValueError("Date is required")
        if self.duration_minutes is None or self.duration_minutes <= 0:
            raise ValueError("Duration must be positive")
        if not self.description:
            raise ValueError("Description is required")
        
        # Reviewed logs must have a reviewer and review timestamp
        if self.status in [ManualLogStatus.APPROVED, ManualLogStatus.REJECTED]:
            if not self.reviewed_by:
                raise ValueError("Reviewed logs must have a reviewer")
            if not self.reviewed_at:
                raise ValueError("Reviewed logs must have a reviewed_at timestamp")

"""Profile model for students and administrators."""
from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.orm import relationship
import enum
from volunteer_hours.database import Base
from volunteer_hours.models.record import RecordMixin, enum_column_type
from volunteer_hours.timeutils import utcnow


DEFAULT_TOTAL_GOAL = 150


class UserRole(str, enum.Enum):
    """User role enumeration."""
    STUDENT = "student"
    ADMIN = "admin"


class Profile(RecordMixin, Base):
    """Identity and hour goal of a user."""
    
    __tablename__ = "profiles"
    
    id = Column(String(36), primary_key=True)
    full_name = Column(String(255), nullable=False)
    role = Column(enum_column_type(UserRole), nullable=False, default=UserRole.STUDENT)
    total_goal = Column(Integer, nullable=False, default=DEFAULT_TOTAL_GOAL)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    
    # Relationships
    shifts = relationship("Shift", back_populates="profile")
    manual_logs = relationship("ManualLog", back_populates="profile", foreign_keys="ManualLog.user_id")
    
    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, full_name={self.full_name}, role={self.role})>"
    
    def validate(self) -> None:
        """Validate profile data."""
        if not self.id:
            raise ValueError("Profile ID is required")
        if not self.full_name:
            raise ValueError("Full name is required")
        if self.total_goal is not None and self.total_goal <= 0:
            raise ValueError("Total goal must be positive")

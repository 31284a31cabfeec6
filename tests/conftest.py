"""Pytest configuration and fixtures for tests."""
import pytest
import uuid
from datetime import datetime, timedelta
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from typing import Generator
from contextlib import contextmanager

from volunteer_hours.database import Base
from volunteer_hours.models import Profile, UserRole, Shift, ManualLog
from tests.fakes import FakeRecordStore


def _create_engine():
    # One shared in-memory connection so every session sees the same tables
    return create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )


@pytest.fixture(scope="function")
def test_db() -> Generator[Session, None, None]:
    """
    Create a test database session for each test.
    Uses an in-memory SQLite database for fast testing.
    """
    engine = _create_engine()
    
    # Create all tables
    Base.metadata.create_all(bind=engine)
    
    # Create session
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestSessionLocal()
    
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@contextmanager
def get_test_db_session():
    """
    Context manager for creating test database sessions.
    Used for property-based tests where fixtures don't work well.
    """
    engine = _create_engine()
    Base.metadata.create_all(bind=engine)
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestSessionLocal()
    
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def fake_store() -> FakeRecordStore:
    """Empty in-memory record store."""
    return FakeRecordStore()


def make_profile(db: Session, full_name: str = "Test Student", role: UserRole = UserRole.STUDENT, total_goal: int = 150) -> Profile:
    """Persist and return a profile."""
    profile = Profile(
        id=str(uuid.uuid4()),
        full_name=full_name,
        role=role,
        total_goal=total_goal,
        created_at=datetime.utcnow()
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def make_completed_shift(db: Session, user_id: str, minutes: float, category: str = "tutoring") -> Shift:
    """Persist a shift closed `minutes` after it started."""
    start = datetime(2026, 2, 17, 8, 0, 0)
    shift = Shift(
        id=str(uuid.uuid4()),
        user_id=user_id,
        category=category,
        task_description="Math tutoring",
        start_time=start,
        end_time=start + timedelta(minutes=minutes)
    )
    db.add(shift)
    db.commit()
    db.refresh(shift)
    return shift


def make_manual_log(db: Session, user_id: str, minutes: float, status: str = "pending", created_at: datetime = None) -> ManualLog:
    """Persist a manual log with the given status."""
    log = ManualLog(
        id=str(uuid.uuid4()),
        user_id=user_id,
        date=datetime(2026, 2, 15).date(),
        duration_minutes=minutes,
        description="Library help",
        category="community_service",
        status=status,
        created_at=created_at or datetime.utcnow()
    )
    db.add(log)
    db.commit()
    db.refresh(log)
    return log

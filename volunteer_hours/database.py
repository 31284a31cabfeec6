"""Database connection and session management."""
import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from typing import Any, Dict, Generator
from volunteer_hours.config import settings


logger = logging.getLogger(__name__)


def _connect_args() -> Dict[str, Any]:
    """Driver arguments that bound every call by the request timeout."""
    timeout = settings.request_timeout_seconds
    if settings.is_sqlite:
        return {"check_same_thread": False, "timeout": timeout}
    return {
        "connect_timeout": timeout,
        "read_timeout": timeout,
        "write_timeout": timeout,
    }


def _engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "pool_pre_ping": True,
        "pool_recycle": settings.db_pool_recycle,
        "echo": settings.debug,
        "connect_args": _connect_args(),
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=min(settings.db_pool_timeout, settings.request_timeout_seconds),
        )
    return options


# Create database engine
engine = create_engine(settings.database_url, **_engine_options())

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for ORM models
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session.
    
    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Database session error: {e}")
        raise
    finally:
        db.close()


def init_db() -> None:
    """Initialize database by creating all tables."""
    # Register models on Base.metadata
    import volunteer_hours.models  # noqa: F401
    
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

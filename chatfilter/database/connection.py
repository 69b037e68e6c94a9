"""
Database connection management and session handling.
"""

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session as SQLAlchemySession
from sqlalchemy.pool import QueuePool, StaticPool
from typing import Generator
import logging

from config.settings import settings

logger = logging.getLogger(__name__)


def build_engine(url: str = None, echo: bool = None):
    """
    Create a SQLAlchemy engine for the configured database.

    SQLite is used for local development and tests; any other URL gets a
    pooled engine tuned by the database settings.
    """
    url = url or settings.database.url
    echo = settings.database.echo if echo is None else echo

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url:
            # Share the single in-memory database across sessions
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)

    return create_engine(
        url,
        echo=echo,
        poolclass=QueuePool,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        pool_timeout=settings.database.pool_timeout,
        pool_recycle=settings.database.pool_recycle,
        pool_pre_ping=True,  # Validate connections before use
        connect_args={
            "options": "-c timezone=utc",
            "application_name": "chatfilter",
        }
    )


engine = build_engine()

# Create session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False  # Keep objects accessible after commit
)


def get_db() -> Generator[SQLAlchemySession, None, None]:
    """
    Get a database session, rolling back on error.

    Yields:
        SQLAlchemySession: Database session instance
    """
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Database session error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def check_database_health() -> bool:
    """
    Check database connectivity and health.

    Returns:
        bool: True if database is healthy, False otherwise
    """
    try:
        db = SessionLocal()
        db.execute(text("SELECT 1"))
        db.close()
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False


def create_tables(bind=None):
    """
    Create all database tables.
    This should only be used in development or testing.
    In production, use Alembic migrations.
    """
    from .models import Base
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created successfully")


def drop_tables(bind=None):
    """
    Drop all database tables.
    WARNING: This will delete all data!
    Only use in development or testing.
    """
    from .models import Base
    Base.metadata.drop_all(bind=bind or engine)
    logger.warning("All database tables dropped")

"""
Pytest configuration and fixtures for testing.
"""

import pytest
import os
import sys
from pathlib import Path
from sqlalchemy.orm import sessionmaker

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Set test environment before importing chatfilter modules
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from config.test_settings import test_settings
from chatfilter.core.moderation_config import ModerationConfig, StaticConfigProvider
from chatfilter.database.connection import build_engine, create_tables, drop_tables
from chatfilter.database.memory import InMemoryAccountStore, InMemoryStrikeStore
from chatfilter.database.utils import DatabaseManager
from chatfilter.services.events import RecordingEventSink

SELLER_ID = 1
BUYER_ID = 2


@pytest.fixture(scope="function")
def test_engine():
    """Create an in-memory SQLite engine with all tables."""
    engine = build_engine(test_settings.database.url, echo=test_settings.database.echo)
    create_tables(bind=engine)

    yield engine

    drop_tables(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db(test_engine):
    """Create test database session."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_engine,
        expire_on_commit=False
    )

    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def db_manager(test_db):
    """Create a DatabaseManager instance for testing."""
    return DatabaseManager(test_db)


@pytest.fixture
def seller(db_manager):
    """A user with an active seller profile."""
    user = db_manager.create_user(name="Tienda Quito", email="tienda@example.com")
    db_manager.create_seller(user.id, store_name="Tienda Quito")
    return user


@pytest.fixture
def buyer(db_manager):
    """A user without a seller profile."""
    return db_manager.create_user(name="Comprador", email="comprador@example.com")


@pytest.fixture
def default_config():
    """Moderation configuration with the documented defaults."""
    return ModerationConfig()


@pytest.fixture
def static_config():
    """Empty static provider; every key falls back to its default."""
    return StaticConfigProvider()


@pytest.fixture
def strike_store():
    return InMemoryStrikeStore()


@pytest.fixture
def account_store():
    return InMemoryAccountStore(sellers=[SELLER_ID])


@pytest.fixture
def event_sink():
    return RecordingEventSink()

"""
Database package for the chat filter.
Contains database models, connection management and store implementations.
"""

from .connection import get_db, engine, SessionLocal, build_engine, check_database_health, create_tables, drop_tables
from .models import Base, User, Seller, UserStrike, Configuration
from .utils import SQLStrikeStore, SQLAccountStore, DatabaseConfigProvider, DatabaseManager
from .memory import InMemoryStrikeStore, InMemoryAccountStore

__all__ = [
    "get_db",
    "engine",
    "SessionLocal",
    "build_engine",
    "check_database_health",
    "create_tables",
    "drop_tables",
    "Base",
    "User",
    "Seller",
    "UserStrike",
    "Configuration",
    "SQLStrikeStore",
    "SQLAccountStore",
    "DatabaseConfigProvider",
    "DatabaseManager",
    "InMemoryStrikeStore",
    "InMemoryAccountStore",
]

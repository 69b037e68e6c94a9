"""
SQLAlchemy models for the chat filter.
Defines the account, strike and configuration tables the filter reads and writes.
"""

from sqlalchemy import (
    Column, String, DateTime, Integer, Text, Boolean,
    ForeignKey, Index, CheckConstraint
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class User(Base):
    """
    User model for marketplace accounts.
    Buyers and sellers share this table; ``is_blocked`` is flipped by the
    strike escalation and only cleared by an administrator.
    """
    __tablename__ = 'users'

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Account identification
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)

    # Moderation state
    is_blocked = Column(Boolean, default=False, nullable=False)

    # Audit fields
    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    seller = relationship("Seller", back_populates="user", uselist=False, cascade="all, delete-orphan")
    strikes = relationship("UserStrike", back_populates="user", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_users_blocked', 'is_blocked'),
    )

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', blocked={self.is_blocked})>"


class Seller(Base):
    """
    Seller model for store profiles attached to a user.
    """
    __tablename__ = 'sellers'

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Foreign key to user
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), unique=True, nullable=False)

    # Store information
    store_name = Column(String(255), nullable=False)
    status = Column(String(20), default='active', nullable=False)  # 'active', 'inactive', 'pending'

    # Audit fields
    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    user = relationship("User", back_populates="seller")

    __table_args__ = (
        CheckConstraint("status IN ('active', 'inactive', 'pending')", name='valid_seller_status'),
        Index('idx_sellers_status', 'status'),
    )

    def __repr__(self):
        return f"<Seller(user_id={self.user_id}, store='{self.store_name}', status='{self.status}')>"


class UserStrike(Base):
    """
    UserStrike model for chat policy violations.
    Strikes are only ever inserted by the filter; retention is handled elsewhere.
    """
    __tablename__ = 'user_strikes'

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Foreign key to user
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    # Violation details
    reason = Column(String(255), nullable=False)
    message_id = Column(Integer, nullable=True)  # Chat message that caused the strike, if stored

    # Audit fields
    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False)

    # Relationships
    user = relationship("User", back_populates="strikes")

    __table_args__ = (
        CheckConstraint("LENGTH(reason) > 0", name='non_empty_strike_reason'),
        Index('idx_user_strikes_user', 'user_id'),
        Index('idx_user_strikes_created', 'created_at'),
    )

    def __repr__(self):
        return f"<UserStrike(user_id={self.user_id}, reason='{self.reason}')>"


class Configuration(Base):
    """
    Configuration model for administrator-managed settings.
    Values are stored as text and typed by ``type``.
    """
    __tablename__ = 'configurations'

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Setting identification
    key = Column(String(255), unique=True, nullable=False, index=True)
    value = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    group = Column(String(50), default='general', nullable=False)
    type = Column(String(20), default='text', nullable=False)  # 'text', 'number', 'boolean', 'json'

    # Audit fields
    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("type IN ('text', 'number', 'boolean', 'json', 'textarea')", name='valid_config_type'),
        Index('idx_configurations_group', 'group'),
    )

    def __repr__(self):
        return f"<Configuration(key='{self.key}', value='{self.value}')>"

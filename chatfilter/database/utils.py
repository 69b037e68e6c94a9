"""
Database-backed implementations of the chat filter's stores.
"""

from contextlib import contextmanager
from sqlalchemy.orm import Session as SQLAlchemySession
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional, Any, Iterator
import logging

from chatfilter.core.ports import StrikeRecord
from .models import User, Seller, UserStrike, Configuration

logger = logging.getLogger(__name__)


def _to_record(strike: UserStrike) -> StrikeRecord:
    return StrikeRecord(
        id=strike.id,
        user_id=strike.user_id,
        reason=strike.reason,
        created_at=strike.created_at,
    )


class SQLStrikeStore:
    """
    Strike history stored in the ``user_strikes`` table.

    Writes are flushed, not committed; the enclosing ``lock_user()`` block
    of the account store commits the whole escalation step.
    """

    def __init__(self, db: SQLAlchemySession):
        self.db = db

    def create_strike(self, user_id: int, reason: str, message_id: Optional[int] = None) -> StrikeRecord:
        """
        Insert a strike for a user.

        Raises:
            SQLAlchemyError: If database operation fails
        """
        try:
            strike = UserStrike(user_id=user_id, reason=reason, message_id=message_id)
            self.db.add(strike)
            self.db.flush()
            self.db.refresh(strike)

            logger.info(f"Created strike {strike.id} for user {user_id}")
            return _to_record(strike)

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create strike for user {user_id}: {e}")
            raise

    def count_strikes(self, user_id: int) -> int:
        try:
            return self.db.query(UserStrike).filter(
                UserStrike.user_id == user_id
            ).count()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to count strikes for user {user_id}: {e}")
            raise


class SQLAccountStore:
    """
    User and seller state stored in the ``users`` and ``sellers`` tables.
    """

    def __init__(self, db: SQLAlchemySession):
        self.db = db

    def is_seller(self, user_id: int) -> bool:
        try:
            return self.db.query(Seller.id).filter(
                Seller.user_id == user_id
            ).first() is not None
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to look up seller profile for user {user_id}: {e}")
            raise

    def block_user(self, user_id: int) -> None:
        """Set ``is_blocked``; blocking a blocked or unknown user changes nothing."""
        try:
            user = self.db.get(User, user_id)
            if user is None:
                logger.warning(f"Cannot block unknown user {user_id}")
                return
            if not user.is_blocked:
                user.is_blocked = True
                self.db.flush()
                logger.info(f"Blocked user {user_id}")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to block user {user_id}: {e}")
            raise

    def set_seller_inactive(self, user_id: int) -> None:
        try:
            seller = self.db.query(Seller).filter(Seller.user_id == user_id).first()
            if seller is not None and seller.status != 'inactive':
                seller.status = 'inactive'
                self.db.flush()
                logger.info(f"Seller profile of user {user_id} set to inactive")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to deactivate seller for user {user_id}: {e}")
            raise

    @contextmanager
    def lock_user(self, user_id: int) -> Iterator[None]:
        """
        Run one escalation step as a single transaction.

        Takes a row lock on the user (``SELECT ... FOR UPDATE`` where the
        database supports it) so concurrent strikes for the same user are
        counted one after another, then commits. Any error rolls the whole
        step back and propagates.
        """
        try:
            self.db.query(User).filter(User.id == user_id).with_for_update().first()
            yield
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Strike transaction failed for user {user_id}: {e}")
            raise
        except Exception:
            self.db.rollback()
            raise


class DatabaseConfigProvider:
    """
    Reads configuration values from the ``configurations`` table.

    Every call queries the database so that administrator edits are picked
    up by the next message.
    """

    def __init__(self, db: SQLAlchemySession):
        self.db = db

    def get_config(self, key: str, default: Any = None) -> Any:
        try:
            value = self.db.query(Configuration.value).filter(
                Configuration.key == key
            ).scalar()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to read configuration {key}: {e}")
            raise

        return default if value is None else value


class DatabaseManager:
    """
    Database manager class for account and configuration maintenance.
    """

    def __init__(self, db: SQLAlchemySession):
        self.db = db

    def create_user(self, name: str, email: str, is_blocked: bool = False) -> User:
        """
        Create a marketplace user.

        Raises:
            SQLAlchemyError: If database operation fails
        """
        try:
            user = User(name=name, email=email, is_blocked=is_blocked)
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)

            logger.info(f"Created user {user.id}")
            return user

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create user {email}: {e}")
            raise

    def create_seller(self, user_id: int, store_name: str, status: str = 'active') -> Seller:
        """
        Attach a seller profile to an existing user.

        Raises:
            SQLAlchemyError: If database operation fails
        """
        try:
            seller = Seller(user_id=user_id, store_name=store_name, status=status)
            self.db.add(seller)
            self.db.commit()
            self.db.refresh(seller)

            logger.info(f"Created seller profile for user {user_id}")
            return seller

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create seller for user {user_id}: {e}")
            raise

    def get_user(self, user_id: int) -> Optional[User]:
        try:
            return self.db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to retrieve user {user_id}: {e}")
            return None

    def get_seller(self, user_id: int) -> Optional[Seller]:
        try:
            return self.db.query(Seller).filter(Seller.user_id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to retrieve seller for user {user_id}: {e}")
            return None

    def set_config(
        self,
        key: str,
        value: Any,
        group: str = 'moderation',
        type: str = 'number',
        description: Optional[str] = None
    ) -> Configuration:
        """
        Insert or update a configuration value.

        Raises:
            SQLAlchemyError: If database operation fails
        """
        try:
            config = self.db.query(Configuration).filter(Configuration.key == key).first()
            if config is None:
                config = Configuration(key=key, group=group, type=type, description=description)
                self.db.add(config)

            config.value = None if value is None else str(value)
            self.db.commit()
            self.db.refresh(config)

            logger.info(f"Configuration {key} set to {config.value}")
            return config

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to set configuration {key}: {e}")
            raise

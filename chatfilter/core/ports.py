"""
Interfaces of the collaborators the chat filter calls into.

Persistence, account storage, configuration storage and notification
delivery live outside this package; these protocols describe what the
filter needs from them.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ContextManager, Protocol, runtime_checkable


@dataclass(frozen=True)
class StrikeRecord:
    """A persisted strike as returned by a strike store."""
    id: int
    user_id: int
    reason: str
    created_at: datetime


@runtime_checkable
class ConfigProvider(Protocol):
    """Read access to administrator-managed configuration values."""

    def get_config(self, key: str, default: Any = None) -> Any:
        ...


class StrikeStore(Protocol):
    """Durable strike history."""

    def create_strike(self, user_id: int, reason: str) -> StrikeRecord:
        ...

    def count_strikes(self, user_id: int) -> int:
        ...


class AccountStore(Protocol):
    """User and seller account state."""

    def is_seller(self, user_id: int) -> bool:
        ...

    def block_user(self, user_id: int) -> None:
        """Mark the user as blocked. Blocking a blocked user is a no-op."""
        ...

    def set_seller_inactive(self, user_id: int) -> None:
        ...

    def lock_user(self, user_id: int) -> ContextManager[None]:
        """Serialize strike registration for a single user."""
        ...


class EventSink(Protocol):
    """Receives domain events for downstream notification delivery."""

    def emit(self, event: Any) -> None:
        ...

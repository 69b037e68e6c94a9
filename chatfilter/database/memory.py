"""
In-process stores for embedding the filter without a database and for tests.
"""

import threading
from collections import defaultdict
from contextlib import contextmanager
from datetime import datetime, timezone
from itertools import count
from typing import Dict, Iterator, List, Set

from chatfilter.core.ports import StrikeRecord


class InMemoryStrikeStore:
    """Strike history kept in a list; thread-safe."""

    def __init__(self):
        self._lock = threading.Lock()
        self._ids = count(1)
        self.strikes: List[StrikeRecord] = []

    def create_strike(self, user_id: int, reason: str) -> StrikeRecord:
        with self._lock:
            record = StrikeRecord(
                id=next(self._ids),
                user_id=user_id,
                reason=reason,
                created_at=datetime.now(timezone.utc),
            )
            self.strikes.append(record)
            return record

    def count_strikes(self, user_id: int) -> int:
        with self._lock:
            return sum(1 for strike in self.strikes if strike.user_id == user_id)

    def strikes_for(self, user_id: int) -> List[StrikeRecord]:
        with self._lock:
            return [strike for strike in self.strikes if strike.user_id == user_id]


class InMemoryAccountStore:
    """
    Account state for a fixed set of sellers.

    ``lock_user`` hands out one ``threading.Lock`` per user.
    """

    def __init__(self, sellers=()):
        self.sellers: Set[int] = set(sellers)
        self.blocked: Set[int] = set()
        self.inactive_sellers: Set[int] = set()
        self._guard = threading.Lock()
        self._user_locks: Dict[int, threading.Lock] = defaultdict(threading.Lock)

    def add_seller(self, user_id: int) -> None:
        self.sellers.add(user_id)

    def is_seller(self, user_id: int) -> bool:
        return user_id in self.sellers

    def is_blocked(self, user_id: int) -> bool:
        return user_id in self.blocked

    def block_user(self, user_id: int) -> None:
        self.blocked.add(user_id)

    def set_seller_inactive(self, user_id: int) -> None:
        if user_id in self.sellers:
            self.inactive_sellers.add(user_id)

    def seller_status(self, user_id: int) -> str:
        return 'inactive' if user_id in self.inactive_sellers else 'active'

    @contextmanager
    def lock_user(self, user_id: int) -> Iterator[None]:
        with self._guard:
            lock = self._user_locks[user_id]
        with lock:
            yield

"""
Strike escalation: records strikes and blocks sellers that reach the limit.
"""

from dataclasses import dataclass
from typing import Optional

from chatfilter.core.logging import ContextLogger, get_logger
from chatfilter.core.ports import AccountStore, EventSink, StrikeRecord, StrikeStore
from chatfilter.schemas import AccountBlockedEvent, StrikeAddedEvent

logger = get_logger(__name__)


@dataclass(frozen=True)
class EscalationOutcome:
    """What a single strike registration did."""
    strike: StrikeRecord
    strike_count: Optional[int]  # None for non-sellers, whose strikes are never counted
    blocked: bool


class EscalationEngine:
    """
    Per-user strike state machine: Active -> Active(n strikes) -> Blocked.

    Every user accumulates strike history; only sellers are counted and
    blocked. The engine never unblocks an account, that is an administrative
    action. The persist, count, compare and block steps for one user run
    under the account store's per-user lock, so two concurrent strikes near
    the threshold cannot both see a count below it.
    """

    def __init__(
        self,
        strike_store: StrikeStore,
        account_store: AccountStore,
        event_sink: EventSink
    ):
        self.strike_store = strike_store
        self.account_store = account_store
        self.event_sink = event_sink

    def register_strike(self, user_id: int, threshold: int, reason: str) -> EscalationOutcome:
        """
        Record a strike and apply the blocking rule.

        Args:
            user_id: Author of the offending message
            threshold: Strike count at which a seller is blocked
            reason: Why the strike was given

        Returns:
            EscalationOutcome: The stored strike, the seller's strike count and
            whether the account is blocked after this strike
        """
        log = ContextLogger(logger, {"user_id": user_id})

        with self.account_store.lock_user(user_id):
            strike = self.strike_store.create_strike(user_id, reason)

            if not self.account_store.is_seller(user_id):
                log.info("Strike recorded for non-seller", strike_id=strike.id, reason=reason)
                return EscalationOutcome(strike=strike, strike_count=None, blocked=False)

            self.event_sink.emit(StrikeAddedEvent(
                strike_id=strike.id,
                user_id=user_id,
                reason=reason,
                created_at=strike.created_at,
            ))

            strike_count = self.strike_store.count_strikes(user_id)
            log.info(
                "Strike recorded for seller",
                strike_id=strike.id,
                strike_count=strike_count,
                threshold=threshold,
                reason=reason
            )

            if strike_count < threshold:
                return EscalationOutcome(strike=strike, strike_count=strike_count, blocked=False)

            self.account_store.block_user(user_id)
            self.account_store.set_seller_inactive(user_id)

            log.warning("Seller account blocked", strike_count=strike_count, threshold=threshold)
            self.event_sink.emit(AccountBlockedEvent(
                user_id=user_id,
                strike_count=strike_count,
                reason=f"Cuenta bloqueada por acumular {strike_count} strikes",
            ))

            return EscalationOutcome(strike=strike, strike_count=strike_count, blocked=True)

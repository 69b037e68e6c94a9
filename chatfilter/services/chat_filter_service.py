"""
Chat filter service: the entry point used by the chat message pipeline.
"""

import logging
from typing import Any, Optional

from chatfilter.core.censorship import Censor
from chatfilter.core.decision_engine import DecisionEngine, DetectionResult
from chatfilter.core.escalation import EscalationEngine, EscalationOutcome
from chatfilter.core.moderation_config import ModerationConfig, SettingsConfigProvider
from chatfilter.database.memory import InMemoryAccountStore, InMemoryStrikeStore
from chatfilter.database.utils import DatabaseConfigProvider, SQLAccountStore, SQLStrikeStore
from chatfilter.schemas import ClassificationResult
from chatfilter.services.events import LoggingEventSink

logger = logging.getLogger(__name__)


class EnforcementError(Exception):
    """
    Raised when a message was flagged but recording the strike failed.

    The moderation verdict is still available on ``result``; the store
    error is chained as ``__cause__``.
    """

    def __init__(self, result: DetectionResult, user_id: int):
        super().__init__(f"Failed to enforce '{result.rule.value}' strike for user {user_id}")
        self.result = result
        self.user_id = user_id


class ChatFilterService:
    """
    Classifies, enforces and censors chat messages.

    Classification is pure; enforcement is only performed by
    ``classify_and_enforce`` and requires an escalation engine.
    """

    def __init__(
        self,
        config_provider: Any = None,
        escalation: Optional[EscalationEngine] = None
    ):
        self.config_provider = config_provider or SettingsConfigProvider()
        self.escalation = escalation
        self.engine = DecisionEngine(self.config_provider)
        self.censor_engine = Censor(self.config_provider)

    @classmethod
    def from_session(cls, db, event_sink: Any = None) -> "ChatFilterService":
        """Service backed by the database: configuration table, strikes and accounts."""
        escalation = EscalationEngine(
            strike_store=SQLStrikeStore(db),
            account_store=SQLAccountStore(db),
            event_sink=event_sink or LoggingEventSink(),
        )
        return cls(DatabaseConfigProvider(db), escalation)

    @classmethod
    def in_memory(cls, sellers=(), config_provider: Any = None, event_sink: Any = None) -> "ChatFilterService":
        """Service with process-local stores, for embedding and tests."""
        escalation = EscalationEngine(
            strike_store=InMemoryStrikeStore(),
            account_store=InMemoryAccountStore(sellers),
            event_sink=event_sink or LoggingEventSink(),
        )
        return cls(config_provider, escalation)

    def classify(self, message: str) -> ClassificationResult:
        """Classify a message without side effects."""
        result = self.engine.classify(message)
        return ClassificationResult(
            flagged=result.flagged,
            reason=result.reason,
            rule=result.rule.value if result.rule else None,
        )

    def classify_and_enforce(
        self,
        message: str,
        user_id: int,
        strike_threshold: Optional[int] = None
    ) -> bool:
        """
        Classify a message and register a strike for its author if flagged.

        Args:
            message: Raw message text
            user_id: Author of the message
            strike_threshold: Strikes before a seller is blocked
                (``moderation.userStrikesThreshold`` when omitted)

        Returns:
            bool: True if the message contains prohibited content

        Raises:
            EnforcementError: The message was flagged but the strike could not
                be recorded
        """
        config = ModerationConfig.load(self.config_provider)
        result = self.engine.classify(message, config)
        if not result.flagged:
            return False

        if self.escalation is None:
            logger.warning("No escalation engine configured, strike not recorded", extra={"user_id": user_id})
            return True

        threshold = config.user_strikes_threshold if strike_threshold is None else strike_threshold
        self.enforce(result, user_id, threshold)
        return True

    def enforce(self, result: DetectionResult, user_id: int, threshold: int) -> EscalationOutcome:
        """Register a strike for an already flagged result."""
        try:
            return self.escalation.register_strike(user_id, threshold, result.reason)
        except Exception as e:
            logger.error(
                f"Strike registration failed: {e}",
                extra={"user_id": user_id, "rule": result.rule.value},
                exc_info=True
            )
            raise EnforcementError(result, user_id) from e

    def censor(self, message: str) -> str:
        """Return a copy of the message with contact information redacted."""
        return self.censor_engine.censor(message)

    # Names used by the chat pipeline

    def contains_prohibited_content(
        self,
        message: str,
        user_id: Optional[int] = None,
        strike_threshold: Optional[int] = None
    ) -> bool:
        if user_id is None:
            return self.engine.classify(message).flagged
        return self.classify_and_enforce(message, user_id, strike_threshold)

    def get_reject_reason(self, message: str) -> Optional[str]:
        return self.engine.get_reject_reason(message)

    def censor_prohibited_content(self, message: str) -> str:
        return self.censor(message)

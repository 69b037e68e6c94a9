"""
Decision engine that runs the detector chain over a chat message.
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from chatfilter.core.context_classifier import ContextClassifier
from chatfilter.core.detectors import (
    Detector,
    RuleId,
    build_detection_chain,
    build_reject_chain,
)
from chatfilter.core.logging import get_logger
from chatfilter.core.moderation_config import ModerationConfig, SettingsConfigProvider
from chatfilter.core.normalizer import normalize

logger = get_logger(__name__)


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of classifying one message."""
    flagged: bool
    reason: Optional[str] = None
    rule: Optional[RuleId] = None

    @classmethod
    def clean(cls) -> "DetectionResult":
        return cls(flagged=False)

    @classmethod
    def flag(cls, rule: RuleId, reason: str) -> "DetectionResult":
        return cls(flagged=True, reason=reason, rule=rule)


class DecisionEngine:
    """
    Evaluates the detectors in fixed priority order.

    Unconditional rules (numeric emojis, explicit contact requests) run
    first; the context-dependent rules run last because they scan the
    whole vocabulary. The first detector that fires decides the result.
    Configuration is read from the provider on every call so administrator
    edits take effect immediately.
    """

    def __init__(self, config_provider: Any = None):
        self.config_provider = config_provider or SettingsConfigProvider()

    def load_config(self) -> ModerationConfig:
        return ModerationConfig.load(self.config_provider)

    def _first_match(self, normalized: str, chain: List[Detector]) -> Optional[Detector]:
        for detector in chain:
            if detector.detect(normalized):
                return detector
        return None

    def classify(self, message: str, config: Optional[ModerationConfig] = None) -> DetectionResult:
        """
        Classify a chat message.

        Args:
            message: Raw message text
            config: Configuration snapshot (loaded from the provider when omitted)

        Returns:
            DetectionResult: Clean, or flagged with the rule and strike reason
        """
        config = config or self.load_config()
        normalized = normalize(message)
        detector = self._first_match(normalized, build_detection_chain(config))

        if detector is None:
            return DetectionResult.clean()

        logger.info(
            "Message flagged",
            extra={"rule": detector.rule.value, "message_length": len(message)}
        )
        return DetectionResult.flag(detector.rule, detector.strike_reason)

    def get_reject_reason(self, message: str) -> Optional[str]:
        """
        Explain why a message would be rejected.

        Returns:
            str: User-facing explanation, None if nothing objectionable was found
        """
        config = self.load_config()
        normalized = normalize(message)
        detector = self._first_match(normalized, build_reject_chain(config))
        return detector.reject_message if detector else None

    def context_classifier(self) -> ContextClassifier:
        """Context classifier bound to the current configuration."""
        return ContextClassifier(self.load_config())

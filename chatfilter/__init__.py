"""
Contact-information leak filter and strike escalation for marketplace chat.
"""

from chatfilter.core.censorship import Censor
from chatfilter.core.decision_engine import DecisionEngine, DetectionResult
from chatfilter.core.detectors import RuleId
from chatfilter.core.escalation import EscalationEngine, EscalationOutcome
from chatfilter.core.moderation_config import ModerationConfig, StaticConfigProvider, SettingsConfigProvider
from chatfilter.core.normalizer import normalize
from chatfilter.services import ChatFilterService, EnforcementError, FilterMessageUseCase

__version__ = "1.0.0"

__all__ = [
    "Censor",
    "DecisionEngine",
    "DetectionResult",
    "RuleId",
    "EscalationEngine",
    "EscalationOutcome",
    "ModerationConfig",
    "StaticConfigProvider",
    "SettingsConfigProvider",
    "normalize",
    "ChatFilterService",
    "EnforcementError",
    "FilterMessageUseCase",
]

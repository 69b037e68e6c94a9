"""
Moderation thresholds and weights, read fresh from the configuration
provider on every classification.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from config.settings import ModerationSettings, settings
from chatfilter.core.logging import get_logger

logger = get_logger(__name__)


# Dataclass field -> configuration key
CONFIG_KEYS: Dict[str, str] = {
    'user_strikes_threshold': 'moderation.userStrikesThreshold',
    'contact_score_penalty': 'moderation.contactScorePenalty',
    'business_score_bonus': 'moderation.businessScoreBonus',
    'contact_penalty_heavy': 'moderation.contactPenaltyHeavy',
    'minimum_contact_score': 'moderation.minimumContactScore',
    'score_difference_threshold': 'moderation.scoreDifferenceThreshold',
    'consecutive_numbers_limit': 'moderation.consecutiveNumbersLimit',
    'numbers_with_context_limit': 'moderation.numbersWithContextLimit',
}


def _coerce_int(value: Any) -> Optional[int]:
    """Convert a stored configuration value to int, or None if unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        text = str(value).strip()
        number = float(text)
    except (TypeError, ValueError):
        return None
    return int(number) if number.is_integer() else None


@dataclass(frozen=True)
class ModerationConfig:
    """Snapshot of the moderation configuration for a single call."""

    user_strikes_threshold: int = 3
    contact_score_penalty: int = 3
    business_score_bonus: int = 15
    contact_penalty_heavy: int = 20
    minimum_contact_score: int = 8
    score_difference_threshold: int = 5
    consecutive_numbers_limit: int = 7
    numbers_with_context_limit: int = 3

    @classmethod
    def defaults(cls, moderation: Optional[ModerationSettings] = None) -> "ModerationConfig":
        """Build the fallback configuration from application settings."""
        moderation = moderation or settings.moderation
        return cls(**{f.name: getattr(moderation, f.name) for f in fields(cls)})

    @classmethod
    def load(cls, provider: Any, fallback: Optional["ModerationConfig"] = None) -> "ModerationConfig":
        """
        Read every moderation key from the provider.

        A key that is missing, unreadable or not an integer falls back to
        its default; configuration problems never abort classification.

        Args:
            provider: Object exposing ``get_config(key, default)``
            fallback: Defaults to use (application settings when omitted)

        Returns:
            ModerationConfig: Values to use for this call
        """
        fallback = fallback or cls.defaults()
        values = {}

        for name, key in CONFIG_KEYS.items():
            default = getattr(fallback, name)
            try:
                raw = provider.get_config(key, default)
            except Exception as e:
                logger.warning(
                    "Configuration unavailable, using default",
                    extra={"config_key": key, "default": default, "error": str(e)}
                )
                values[name] = default
                continue

            value = _coerce_int(raw)
            if value is None:
                logger.warning(
                    "Invalid configuration value, using default",
                    extra={"config_key": key, "value": raw, "default": default}
                )
                value = default
            values[name] = value

        return cls(**values)


class StaticConfigProvider:
    """Configuration provider backed by a plain mapping."""

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self.values = dict(values or {})

    def get_config(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)


class SettingsConfigProvider:
    """Configuration provider that serves the process settings defaults."""

    def __init__(self, moderation: Optional[ModerationSettings] = None):
        self.moderation = moderation or settings.moderation

    def get_config(self, key: str, default: Any = None) -> Any:
        for name, config_key in CONFIG_KEYS.items():
            if config_key == key:
                return getattr(self.moderation, name)
        return default

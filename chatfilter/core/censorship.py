"""
Redaction of contact information in chat messages.
"""

from typing import Any, Optional

from chatfilter.core.context_classifier import ContextClassifier
from chatfilter.core.moderation_config import ModerationConfig, SettingsConfigProvider
from chatfilter.core.normalizer import normalize
from chatfilter.core.vocabulary import (
    DEFINITE_PHONE_PATTERNS,
    EMOJI_WARNING_GLYPH,
    GROUPED_DIGITS_PATTERN,
    INTERNATIONAL_PHONE_PATTERN,
    LONG_DIGIT_RUN_CENSOR_PATTERN,
    NUMBER_EMOJI_PATTERNS,
    REDACTION_TOKEN,
)


class Censor:
    """
    Produces a redacted copy of a message.

    Independent of the accept/reject verdict: numeric emojis and definite
    phone numbers are always redacted, ambiguous digit groups only when the
    message reads as contact context.
    """

    def __init__(self, config_provider: Any = None):
        self.config_provider = config_provider or SettingsConfigProvider()

    def censor(self, message: str, config: Optional[ModerationConfig] = None) -> str:
        """
        Redact prohibited content.

        Passes repeat until nothing changes. Each redaction removes digits,
        so this terminates, and censoring an already censored message
        returns it unchanged.

        Args:
            message: Raw message text
            config: Configuration snapshot (loaded from the provider when omitted)

        Returns:
            str: Censored message, identical to the input if nothing matched
        """
        classifier = ContextClassifier(config or ModerationConfig.load(self.config_provider))

        censored = message
        while True:
            next_pass = self._censor_once(censored, classifier)
            if next_pass == censored:
                return censored
            censored = next_pass

    def _censor_once(self, message: str, classifier: ContextClassifier) -> str:
        censored = message
        normalized = normalize(message)

        for pattern in NUMBER_EMOJI_PATTERNS:
            censored = pattern.sub(EMOJI_WARNING_GLYPH, censored)

        for pattern in DEFINITE_PHONE_PATTERNS:
            censored = pattern.sub(REDACTION_TOKEN, censored)

        if classifier.is_in_contact_context(normalized):
            censored = INTERNATIONAL_PHONE_PATTERN.sub(REDACTION_TOKEN, censored)

            if not classifier.has_strong_business_indicators(normalized):
                censored = LONG_DIGIT_RUN_CENSOR_PATTERN.sub(REDACTION_TOKEN, censored)
                censored = GROUPED_DIGITS_PATTERN.sub(REDACTION_TOKEN, censored)

        return censored

"""
Pattern detectors for contact-information leakage.

Each detector answers a single question about a normalized message. The
decision engine runs them as an ordered chain and stops at the first hit.
"""

from enum import Enum
from typing import List, Optional

from chatfilter.core.context_classifier import ContextClassifier
from chatfilter.core.moderation_config import ModerationConfig
from chatfilter.core.vocabulary import (
    CONTACT_REQUEST_PATTERNS,
    DEFINITE_PHONE_PATTERNS,
    GROUPED_DIGITS_PATTERN,
    INTERNATIONAL_PHONE_PATTERN,
    LONG_DIGIT_RUN_PATTERN,
    NUMBER_EMOJI_PATTERNS,
    SUSPICIOUS_COMBOS,
    WRITTEN_NUMBER_PATTERN,
)


class RuleId(Enum):
    """Detection rules, named after what they catch."""
    NUMERIC_EMOJI = "numeric_emoji"
    CONTACT_REQUEST = "contact_request"
    STRONG_CONTACT_INDICATOR = "strong_contact_indicator"
    WRITTEN_NUMBERS = "written_numbers"
    PHONE_NUMBER = "phone_number"


# Short reason stored with the strike
STRIKE_REASONS = {
    RuleId.NUMERIC_EMOJI: "Uso de emojis numéricos prohibidos",
    RuleId.CONTACT_REQUEST: "Solicitud de información de contacto",
    RuleId.STRONG_CONTACT_INDICATOR: "Intercambio explícito de información de contacto",
    RuleId.WRITTEN_NUMBERS: "Números escritos en contexto de contacto",
    RuleId.PHONE_NUMBER: "Número de teléfono detectado",
}

# Explanation shown to the sender when a message is rejected
REJECT_MESSAGES = {
    RuleId.NUMERIC_EMOJI: (
        "El mensaje contiene emojis numéricos, los cuales están prohibidos para evitar "
        "el intercambio de información de contacto."
    ),
    RuleId.CONTACT_REQUEST: (
        "El mensaje contiene solicitudes de información de contacto, lo cual no está permitido."
    ),
    RuleId.STRONG_CONTACT_INDICATOR: (
        "El mensaje contiene patrones claros de intercambio de información de contacto, "
        "lo cual no está permitido."
    ),
    RuleId.WRITTEN_NUMBERS: (
        "El mensaje contiene números escritos en un contexto que sugiere intercambio de "
        "información de contacto."
    ),
    RuleId.PHONE_NUMBER: (
        "El mensaje contiene información que parece ser un número de contacto en un "
        "contexto inapropiado."
    ),
}


class Detector:
    """Base class for a single detection rule."""

    rule: RuleId

    def detect(self, normalized: str) -> bool:
        raise NotImplementedError

    @property
    def strike_reason(self) -> str:
        return STRIKE_REASONS[self.rule]

    @property
    def reject_message(self) -> str:
        return REJECT_MESSAGES[self.rule]

    def __repr__(self):
        return f"<{type(self).__name__}(rule='{self.rule.value}')>"


class NumericEmojiDetector(Detector):
    """Keycap digit emojis are always prohibited, whatever the context."""

    rule = RuleId.NUMERIC_EMOJI

    def detect(self, normalized: str) -> bool:
        return any(pattern.search(normalized) for pattern in NUMBER_EMOJI_PATTERNS)


class ContactRequestDetector(Detector):
    """Explicit requests for social networks, addresses or off-platform chats."""

    rule = RuleId.CONTACT_REQUEST

    def detect(self, normalized: str) -> bool:
        if any(pattern.search(normalized) for pattern in CONTACT_REQUEST_PATTERNS):
            return True
        return any(combo.matches(normalized) for combo in SUSPICIOUS_COMBOS)


class StrongContactIndicatorDetector(Detector):
    """A contact word directly followed by digits, or an address being given."""

    rule = RuleId.STRONG_CONTACT_INDICATOR

    def detect(self, normalized: str) -> bool:
        return ContextClassifier.has_strong_contact_indicators(normalized)


class WrittenNumberDetector(Detector):
    """Phone numbers dictated as words to dodge the digit filters."""

    rule = RuleId.WRITTEN_NUMBERS

    def __init__(self, classifier: ContextClassifier):
        self.classifier = classifier

    def count_written_numbers(self, normalized: str) -> int:
        return len(WRITTEN_NUMBER_PATTERN.findall(normalized))

    def detect(self, normalized: str) -> bool:
        count = self.count_written_numbers(normalized)
        if count == 0:
            return False

        # A long dictated sequence and a short one next to contact words both
        # need the contact reading; the two limits are tuned independently.
        config = self.classifier.config
        if (
            count >= config.consecutive_numbers_limit
            or count >= config.numbers_with_context_limit
        ):
            return self.classifier.is_in_contact_context(normalized)

        return False


class PhoneNumberDetector(Detector):
    """
    Phone numbers, split into definite and ambiguous formats.

    Definite Ecuadorian formats are blocked outright. For ambiguous digit
    groups the first pattern that matches decides, using the context
    classifier; bare long digit runs additionally need the absence of
    strong business indicators so order numbers and SKUs pass.
    """

    rule = RuleId.PHONE_NUMBER

    def __init__(self, classifier: ContextClassifier):
        self.classifier = classifier

    @staticmethod
    def has_definite_phone_number(normalized: str) -> bool:
        return any(pattern.search(normalized) for pattern in DEFINITE_PHONE_PATTERNS)

    def detect(self, normalized: str) -> bool:
        if self.has_definite_phone_number(normalized):
            return True

        if INTERNATIONAL_PHONE_PATTERN.search(normalized):
            return self.classifier.is_in_contact_context(normalized)

        if LONG_DIGIT_RUN_PATTERN.search(normalized):
            return (
                self.classifier.is_in_contact_context(normalized)
                and not self.classifier.has_strong_business_indicators(normalized)
            )

        if GROUPED_DIGITS_PATTERN.search(normalized):
            return self.classifier.is_in_contact_context(normalized)

        return False


def build_detection_chain(
    config: Optional[ModerationConfig] = None,
    classifier: Optional[ContextClassifier] = None
) -> List[Detector]:
    """Detectors in enforcement order: unconditional rules first, context rules last."""
    classifier = classifier or ContextClassifier(config)
    return [
        NumericEmojiDetector(),
        ContactRequestDetector(),
        WrittenNumberDetector(classifier),
        PhoneNumberDetector(classifier),
    ]


def build_reject_chain(
    config: Optional[ModerationConfig] = None,
    classifier: Optional[ContextClassifier] = None
) -> List[Detector]:
    """Detectors used to explain a rejection; adds the explicit contact-exchange rule."""
    classifier = classifier or ContextClassifier(config)
    return [
        NumericEmojiDetector(),
        ContactRequestDetector(),
        StrongContactIndicatorDetector(),
        WrittenNumberDetector(classifier),
        PhoneNumberDetector(classifier),
    ]

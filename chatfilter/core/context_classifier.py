"""
Weighted lexical classifier that decides whether a message is about
exchanging contact details or about the sale itself.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from chatfilter.core.moderation_config import ModerationConfig
from chatfilter.core.vocabulary import (
    BUSINESS_COMBOS,
    BUSINESS_TERMS,
    CONTACT_TERMS,
    EVASION_PHRASES,
    PREFIXED_NUMBER_PATTERN,
    STRONG_BUSINESS_PATTERNS,
    STRONG_CONTACT_PATTERNS,
)


@dataclass
class ContextScore:
    """Contact and business accumulators for one message."""
    contact_score: int
    business_score: int
    minimum_contact_score: int
    score_difference_threshold: int
    signals: List[str] = field(default_factory=list)

    @property
    def difference(self) -> int:
        return self.contact_score - self.business_score

    @property
    def is_contact(self) -> bool:
        # Both the absolute floor and the margin over business language must hold
        return (
            self.contact_score >= self.minimum_contact_score
            and self.difference >= self.score_difference_threshold
        )


def has_suspicious_patterns(normalized: str) -> bool:
    """Check for prefixed international numbers or typical evasion phrases."""
    if PREFIXED_NUMBER_PATTERN.search(normalized):
        return True
    return any(phrase in normalized for phrase in EVASION_PHRASES)


def has_strong_business_indicators(normalized: str) -> bool:
    """Check for a quantity, price or time word paired with a number and unit."""
    if any(pattern.search(normalized) for pattern in STRONG_BUSINESS_PATTERNS):
        return True
    return any(combo.matches(normalized) for combo in BUSINESS_COMBOS)


def has_strong_contact_indicators(normalized: str) -> bool:
    """Check for a contact word paired directly with digits or an address."""
    return any(pattern.search(normalized) for pattern in STRONG_CONTACT_PATTERNS)


class ContextClassifier:
    """
    Scores a normalized message for contact versus business intent.

    Every vocabulary word found in the message (substring match) adds its
    weight to the matching accumulator; indicator patterns then add the
    configured penalties and bonuses.
    """

    def __init__(self, config: Optional[ModerationConfig] = None):
        self.config = config or ModerationConfig.defaults()

    def score(self, normalized: str) -> ContextScore:
        """
        Calculate the contact and business scores for a message.

        Args:
            normalized: Output of ``normalize()``

        Returns:
            ContextScore: Both accumulators and the thresholds applied
        """
        contact_score = 0
        business_score = 0
        signals = []

        for term in CONTACT_TERMS:
            if term.word in normalized:
                contact_score += term.weight
                signals.append(f"contact_word:{term.word}")

        for term in BUSINESS_TERMS:
            if term.word in normalized:
                business_score += term.weight
                signals.append(f"business_word:{term.word}")

        if has_suspicious_patterns(normalized):
            contact_score += self.config.contact_score_penalty
            signals.append("suspicious_pattern")

        if has_strong_business_indicators(normalized):
            business_score += self.config.business_score_bonus
            signals.append("strong_business_indicator")

        if has_strong_contact_indicators(normalized):
            contact_score += self.config.contact_penalty_heavy
            signals.append("strong_contact_indicator")

        return ContextScore(
            contact_score=contact_score,
            business_score=business_score,
            minimum_contact_score=self.config.minimum_contact_score,
            score_difference_threshold=self.config.score_difference_threshold,
            signals=signals,
        )

    def is_in_contact_context(self, normalized: str) -> bool:
        """Return True if the message reads as an attempt to exchange contact details."""
        return self.score(normalized).is_contact

    # Indicator helpers exposed for detectors and censorship
    has_suspicious_patterns = staticmethod(has_suspicious_patterns)
    has_strong_business_indicators = staticmethod(has_strong_business_indicators)
    has_strong_contact_indicators = staticmethod(has_strong_contact_indicators)

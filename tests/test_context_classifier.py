"""
Tests for the contact versus business context classifier.
"""

import pytest

from chatfilter.core.context_classifier import (
    ContextClassifier,
    has_strong_business_indicators,
    has_strong_contact_indicators,
    has_suspicious_patterns,
)
from chatfilter.core.moderation_config import ModerationConfig
from chatfilter.core.normalizer import normalize


class TestContextScore:
    """Test cases for ContextClassifier.score()."""

    def setup_method(self):
        """Set up test fixtures."""
        self.classifier = ContextClassifier(ModerationConfig())

    def test_single_contact_word_reaches_floor(self):
        score = self.classifier.score("contacto")

        assert score.contact_score == 8
        assert score.business_score == 0
        assert score.is_contact
        assert "contact_word:contacto" in score.signals

    def test_business_words_close_the_margin(self):
        score = self.classifier.score("precio contacto")

        assert score.contact_score == 8
        assert score.business_score == 6
        assert score.difference == 2
        assert not score.is_contact

    def test_evasion_phrase_adds_penalty(self):
        score = self.classifier.score(normalize("Mi número es"))

        assert score.contact_score == 8 + 3
        assert "suspicious_pattern" in score.signals

    def test_strong_contact_indicator_adds_heavy_penalty(self):
        score = self.classifier.score("whatsapp 0991234567")

        # whatsapp (8) + whats (2) + heavy penalty (20)
        assert score.contact_score == 30
        assert "strong_contact_indicator" in score.signals

    def test_strong_business_indicator_adds_bonus(self):
        score = self.classifier.score("cuesta 25 dolares")

        # cuesta (6) + dolares (2) + bonus (15)
        assert score.business_score == 23
        assert "strong_business_indicator" in score.signals

    def test_words_containing_ano_add_no_business_points(self):
        assert self.classifier.score("mi hermano").business_score == 0
        assert self.classifier.score("a mano").business_score == 0

        score = self.classifier.score("manana")
        assert score.business_score == 2
        assert score.signals == ["business_word:manana"]

    def test_plain_business_message_is_not_contact(self):
        message = normalize("tengo 12 unidades disponibles, el precio es 45 dolares")
        assert not self.classifier.is_in_contact_context(message)

    def test_empty_message(self):
        score = self.classifier.score("")

        assert score.contact_score == 0
        assert score.business_score == 0
        assert not score.is_contact


class TestContextThresholds:
    """Test cases for configurable thresholds."""

    def test_minimum_contact_score_is_configurable(self):
        strict = ContextClassifier(ModerationConfig(minimum_contact_score=20))
        assert not strict.is_in_contact_context("contacto")

    def test_score_difference_is_configurable(self):
        lenient = ContextClassifier(ModerationConfig(score_difference_threshold=2))
        assert lenient.is_in_contact_context("precio contacto")

    def test_penalties_come_from_config(self):
        classifier = ContextClassifier(ModerationConfig(contact_score_penalty=10))
        assert classifier.score("escribeme").contact_score == 10

    def test_defaults_used_without_config(self):
        assert ContextClassifier().config == ModerationConfig.defaults()


class TestContactMonotonicity:
    """Adding contact vocabulary never turns a contact message into a clean one."""

    def setup_method(self):
        """Set up test fixtures."""
        self.classifier = ContextClassifier(ModerationConfig())

    @pytest.mark.parametrize("message", [
        "contacto",
        "mi numero es",
        "escribeme por fuera",
    ])
    @pytest.mark.parametrize("extra_word", ["whatsapp", "telefono", "celular", "llamar", "facebook"])
    def test_adding_contact_word_keeps_verdict(self, message, extra_word):
        before = self.classifier.score(message)
        after = self.classifier.score(f"{message} {extra_word}")

        assert before.is_contact
        assert after.contact_score >= before.contact_score
        assert after.business_score == before.business_score
        assert after.is_contact


class TestIndicators:
    """Test cases for the indicator helpers."""

    @pytest.mark.parametrize("message, expected", [
        ("+593987654321", True),
        ("00593987654321", True),
        ("te paso mi numero", True),
        ("contactame luego", True),
        ("tengo 5 unidades", False),
    ])
    def test_suspicious_patterns(self, message, expected):
        assert has_suspicious_patterns(message) is expected

    @pytest.mark.parametrize("message, expected", [
        ("cuesta 25 dolares", True),
        ("el precio es 40", True),
        ("demora 3 dias", True),
        ("oferta 20%", True),
        ("memoria 128 gb", True),
        ("vendo productos nuevos", True),
        ("stock disponible", True),
        ("hola como estas", False),
    ])
    def test_strong_business_indicators(self, message, expected):
        assert has_strong_business_indicators(message) is expected

    @pytest.mark.parametrize("message, expected", [
        ("mi numero es 0991234567", True),
        ("llamame al 099", True),
        ("whatsapp 0991234567", True),
        ("mi direccion es la esquina", True),
        ("nos vemos en el parque", True),
        ("te paso mi telefono", True),
        ("mi numero de pedido", False),
    ])
    def test_strong_contact_indicators(self, message, expected):
        assert has_strong_contact_indicators(message) is expected

    def test_helpers_exposed_on_classifier(self):
        assert ContextClassifier.has_strong_contact_indicators("whatsapp 099")

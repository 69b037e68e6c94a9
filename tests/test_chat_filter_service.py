"""
Tests for the chat filter service facade.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from chatfilter import ChatFilterService, EnforcementError, RuleId
from chatfilter.core.escalation import EscalationEngine
from chatfilter.core.moderation_config import StaticConfigProvider
from chatfilter.core.vocabulary import REDACTION_TOKEN
from chatfilter.database.models import Seller, User, UserStrike
from chatfilter.schemas import AccountBlockedEvent, ClassificationResult
from chatfilter.services.events import RecordingEventSink

SELLER_ID = 1
BUYER_ID = 2


class TestClassify:
    """Test cases for the pure classification surface."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = ChatFilterService(StaticConfigProvider())

    def test_classify_returns_schema(self):
        result = self.service.classify("pasame tu whatsapp")

        assert isinstance(result, ClassificationResult)
        assert result.flagged
        assert result.rule == RuleId.CONTACT_REQUEST.value
        assert result.reason == "Solicitud de información de contacto"

    def test_classify_clean(self):
        result = self.service.classify("tengo 12 unidades disponibles, el precio es 45 dolares")

        assert result == ClassificationResult(flagged=False)

    def test_contains_prohibited_content_without_user(self):
        assert self.service.contains_prohibited_content("llamame al 0991234567")
        assert not self.service.contains_prohibited_content("Cuesta 250 dólares")

    def test_censor_aliases(self):
        assert self.service.censor("0963368896") == REDACTION_TOKEN
        assert self.service.censor_prohibited_content("0963368896") == REDACTION_TOKEN

    def test_get_reject_reason(self):
        assert self.service.get_reject_reason("hola") is None
        assert "contacto" in self.service.get_reject_reason("pasame tu correo")

    def test_enforce_without_escalation_still_flags(self):
        assert self.service.classify_and_enforce("0991234567", user_id=SELLER_ID)


class TestClassifyAndEnforce:
    """Test cases for classify_and_enforce with in-memory stores."""

    def setup_method(self):
        """Set up test fixtures."""
        self.events = RecordingEventSink()
        self.provider = StaticConfigProvider()
        self.service = ChatFilterService.in_memory(
            sellers=[SELLER_ID],
            config_provider=self.provider,
            event_sink=self.events
        )
        self.strikes = self.service.escalation.strike_store
        self.accounts = self.service.escalation.account_store

    def test_clean_message_records_nothing(self):
        assert not self.service.classify_and_enforce("Tengo 123 productos disponibles", SELLER_ID)
        assert self.strikes.count_strikes(SELLER_ID) == 0

    def test_flagged_message_records_strike_reason(self):
        assert self.service.classify_and_enforce("pasame tu whatsapp", BUYER_ID)

        [strike] = self.strikes.strikes_for(BUYER_ID)
        assert strike.reason == "Solicitud de información de contacto"

    def test_seller_blocked_after_three_flagged_messages(self):
        messages = [
            "Mi número es 0987654321",
            "Llámame al +593987654321",
            "Contacto: 1\ufe0f\u20e32\ufe0f\u20e3",
        ]
        for message in messages:
            assert self.service.classify_and_enforce(message, SELLER_ID, strike_threshold=3)

        assert self.accounts.is_blocked(SELLER_ID)
        assert self.accounts.seller_status(SELLER_ID) == "inactive"
        assert len(self.events.of_type(AccountBlockedEvent)) == 1

    def test_threshold_read_from_configuration(self):
        self.provider.values["moderation.userStrikesThreshold"] = "1"

        self.service.classify_and_enforce("0991234567", SELLER_ID)

        assert self.accounts.is_blocked(SELLER_ID)

    def test_explicit_threshold_overrides_configuration(self):
        self.provider.values["moderation.userStrikesThreshold"] = "1"

        self.service.classify_and_enforce("0991234567", SELLER_ID, strike_threshold=2)

        assert not self.accounts.is_blocked(SELLER_ID)

    def test_contains_prohibited_content_with_user_enforces(self):
        assert self.service.contains_prohibited_content("0991234567", SELLER_ID, 1)
        assert self.accounts.is_blocked(SELLER_ID)

    def test_store_failure_keeps_verdict(self):
        self.service.escalation.strike_store = MagicMock()
        self.service.escalation.strike_store.create_strike.side_effect = RuntimeError("disk full")

        with pytest.raises(EnforcementError) as exc_info:
            self.service.classify_and_enforce("llamame al 0991234567", SELLER_ID)

        error = exc_info.value
        assert error.result.flagged
        assert error.result.rule == RuleId.PHONE_NUMBER
        assert error.user_id == SELLER_ID
        assert isinstance(error.__cause__, RuntimeError)
        assert not self.accounts.is_blocked(SELLER_ID)

    def test_clean_message_never_touches_stores(self):
        escalation = MagicMock(spec=EscalationEngine)
        service = ChatFilterService(StaticConfigProvider(), escalation)

        assert not service.classify_and_enforce("hola como estas", SELLER_ID)
        escalation.register_strike.assert_not_called()


class TestServiceFromSession:
    """Test cases for the database-backed service."""

    def test_seller_blocked_on_third_strike(self, test_db, seller):
        for _ in range(2):
            test_db.add(UserStrike(user_id=seller.id, reason="Número de teléfono detectado"))
        test_db.commit()

        events = RecordingEventSink()
        service = ChatFilterService.from_session(test_db, event_sink=events)

        assert service.classify_and_enforce("Mi número es 0987654321", seller.id, strike_threshold=3)

        user = test_db.get(User, seller.id)
        test_db.refresh(user)
        assert user.is_blocked
        assert test_db.query(Seller).filter(Seller.user_id == seller.id).one().status == "inactive"
        assert events.of_type(AccountBlockedEvent)[0].strike_count == 3

    def test_threshold_from_configuration_table(self, test_db, db_manager, seller):
        db_manager.set_config("moderation.userStrikesThreshold", 1)
        service = ChatFilterService.from_session(test_db, event_sink=RecordingEventSink())

        service.classify_and_enforce("pasame tu whatsapp", seller.id)

        assert test_db.get(User, seller.id).is_blocked

    def test_database_error_wrapped(self, test_db, seller):
        service = ChatFilterService.from_session(test_db, event_sink=RecordingEventSink())
        service.escalation.strike_store.db = MagicMock()
        service.escalation.strike_store.db.add.side_effect = OperationalError("INSERT", {}, Exception("locked"))

        with pytest.raises(EnforcementError) as exc_info:
            service.classify_and_enforce("0991234567", seller.id)

        assert exc_info.value.result.rule == RuleId.PHONE_NUMBER
        assert isinstance(exc_info.value.__cause__, OperationalError)
        assert test_db.query(UserStrike).count() == 0

"""
Message filtering step of the chat pipeline.
"""

import logging
from typing import Optional

from chatfilter.schemas import FilterOutcome
from chatfilter.services.chat_filter_service import ChatFilterService

logger = logging.getLogger(__name__)


class FilterMessageUseCase:
    """
    Decides whether a chat message may be stored.

    Rejected messages produce a user-facing explanation and a censored copy
    of the content; the strike for the sender is recorded by the filter.
    Without an explicit threshold the configured `moderation.userStrikesThreshold` applies.
    """

    def __init__(self, chat_filter: ChatFilterService, strike_threshold: Optional[int] = None):
        self.chat_filter = chat_filter
        self.strike_threshold = strike_threshold

    def execute(self, content: str, user_id: int) -> FilterOutcome:
        if not self.chat_filter.contains_prohibited_content(content, user_id, self.strike_threshold):
            return FilterOutcome(success=True)

        reason = self.chat_filter.get_reject_reason(content)
        logger.info(f"Message from user {user_id} rejected")

        return FilterOutcome(
            success=False,
            message=f"Mensaje rechazado: {reason}",
            censored_content=self.chat_filter.censor_prohibited_content(content),
        )

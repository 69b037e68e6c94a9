from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

# --- Classification Schemas ---

class ClassificationResult(BaseModel):
    flagged: bool
    reason: Optional[str] = None
    rule: Optional[str] = None  # RuleId value of the detector that fired

class FilterOutcome(BaseModel):
    success: bool
    message: Optional[str] = None  # "Mensaje rechazado: ..." when rejected
    censored_content: Optional[str] = None

# --- Domain Events ---

class StrikeAddedEvent(BaseModel):
    strike_id: int
    user_id: int
    reason: str
    created_at: datetime = Field(default_factory=_utcnow)

class AccountBlockedEvent(BaseModel):
    user_id: int
    strike_count: int
    reason: str
    blocked_at: datetime = Field(default_factory=_utcnow)

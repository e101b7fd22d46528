"""
TrialUsageRecord Entity

One row per email that has ever started a trial.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class TrialUsageRecord(SQLModel, table=True):
    """
    TrialUsageRecord entity - abuse-rate bookkeeping for trials.

    Business Rules:
    - Append-only; only converted_to_paid is ever updated
    - email is unique: one trial per email, forever
    - email_domain drives the per-domain rate limit
    - email_hash is the SHA-256 hex digest of the lower-cased email
    """

    __tablename__ = "trial_usage"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: Optional[UUID] = Field(default=None, foreign_key="users.id", index=True)
    email: str = Field(unique=True, index=True, max_length=255)
    email_domain: str = Field(max_length=255)
    email_hash: str = Field(max_length=64)

    trial_started_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )
    converted_to_paid: bool = Field(default=False)

    __table_args__ = (
        Index("idx_trial_usage_domain_started", "email_domain", "trial_started_at"),
    )

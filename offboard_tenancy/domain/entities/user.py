"""
User Entity

A person authenticated by the identity provider who can belong to
several organizations.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class User(SQLModel, table=True):
    """
    User entity - local record of an identity provider account.

    Business Rules:
    - id is the identity provider's stable user identifier
    - Email is unique and stored lower-case
    - current_organization_id must point at an organization with an
      active membership for this user (or be null)
    - subscription_plan / subscription_status are written by billing sync
      and trial management only
    - Never deleted by this service
    """

    __tablename__ = "users"

    id: UUID = Field(primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    name: str = Field(default="", max_length=255)
    email_verified: bool = Field(default=False)

    current_organization_id: Optional[UUID] = Field(
        default=None, foreign_key="organizations.id"
    )

    # Billing collaborator fields (null plan means free)
    subscription_plan: Optional[str] = Field(default=None, max_length=50)
    subscription_status: Optional[str] = Field(default=None, max_length=50)
    trial_started_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    trial_ends_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_subscription_status", "subscription_status"),)

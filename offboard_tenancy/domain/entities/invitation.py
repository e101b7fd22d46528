"""
Invitation Entity

Single-use, time-limited offer for an email to join an organization.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import InvitationStatus, MemberRole


class Invitation(SQLModel, table=True):
    """
    Invitation entity - pending invitations to join an organization.

    Business Rules:
    - Created by admin/hr_manager when the plan has a free member slot
    - Expires 7 days after creation (evaluated lazily on read)
    - Token is generated server side and looked up by itself only
    - Status only leaves pending: accepted, cancelled or expired
    """

    __tablename__ = "invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    organization_id: UUID = Field(
        foreign_key="organizations.id", nullable=False, index=True
    )
    email: str = Field(max_length=255, nullable=False, index=True)

    role: MemberRole = Field(nullable=False)
    token: str = Field(unique=True, index=True, max_length=64)

    status: InvitationStatus = Field(default=InvitationStatus.pending)

    invited_by: UUID = Field(foreign_key="users.id", nullable=False)
    accepted_by: Optional[UUID] = Field(default=None, foreign_key="users.id")

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    accepted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    cancelled_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invitation_expires_at", "expires_at"),
        Index("idx_invitation_org_email", "organization_id", "email"),
        # One pending invitation per email and organization
        Index(
            "uq_invitation_pending_email",
            "organization_id",
            "email",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
        Index("idx_invitation_status", "status"),
    )

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

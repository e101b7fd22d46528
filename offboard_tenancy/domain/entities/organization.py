"""
Organization Entity

A tenant: the unit to which memberships and invitations belong.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow


class Organization(SQLModel, table=True):
    """
    Organization entity - isolated workspace.

    Business Rules:
    - Created once per signup flow or "create organization" action
    - owner_id is the user whose subscription entitles the organization
    - Immutable apart from name edits
    """

    __tablename__ = "organizations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)

    owner_id: UUID = Field(index=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

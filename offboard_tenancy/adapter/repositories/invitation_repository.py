from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from offboard_tenancy.app.repositories.invitation_repository import IInvitationRepository
from offboard_tenancy.domain.entities import Invitation, InvitationStatus


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        stmt = select(Invitation).where(Invitation.id == invitation_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_token(self, token: str) -> Optional[Invitation]:
        """Get invitation by token"""
        stmt = select(Invitation).where(Invitation.token == token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_pending_by_organization_and_email(
        self, organization_id: UUID, email: str
    ) -> Optional[Invitation]:
        """Get the pending invitation for an email, newest first"""
        stmt = (
            select(Invitation)
            .where(
                Invitation.organization_id == organization_id,
                Invitation.email == email,
                Invitation.status == InvitationStatus.pending,
            )
            .order_by(col(Invitation.created_at).desc())
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_pending_by_organization_id(
        self, organization_id: UUID
    ) -> List[Invitation]:
        stmt = (
            select(Invitation)
            .where(
                Invitation.organization_id == organization_id,
                Invitation.status == InvitationStatus.pending,
            )
            .order_by(col(Invitation.created_at).desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def transition(
        self,
        invitation: Invitation,
        to_status: InvitationStatus,
        **fields: Any,
    ) -> bool:
        stmt = (
            update(Invitation)
            .where(
                col(Invitation.id) == invitation.id,
                col(Invitation.status) == InvitationStatus.pending,
            )
            .values(status=to_status, **fields)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.exec(stmt)
        await self.session.refresh(invitation)
        return result.rowcount == 1

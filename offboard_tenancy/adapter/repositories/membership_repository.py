from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, update
from sqlalchemy.orm import aliased
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from offboard_tenancy.app.repositories.membership_repository import (
    IMembershipRepository,
)
from offboard_tenancy.domain.base import utcnow
from offboard_tenancy.domain.entities import Membership, MemberRole, Organization


class MembershipRepository(IMembershipRepository):
    """Membership repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, membership_id: UUID) -> Optional[Membership]:
        """Get membership by ID"""
        stmt = select(Membership).where(Membership.id == membership_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_user_and_organization(
        self, user_id: UUID, organization_id: UUID
    ) -> Optional[Membership]:
        """Get membership by user and organization, active or not"""
        stmt = select(Membership).where(
            Membership.user_id == user_id,
            Membership.organization_id == organization_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_active_by_user_id(self, user_id: UUID) -> List[Membership]:
        stmt = (
            select(Membership)
            .where(Membership.user_id == user_id, col(Membership.is_active).is_(True))
            .order_by(col(Membership.joined_at).desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_active_by_organization_id(
        self, organization_id: UUID
    ) -> List[Membership]:
        stmt = (
            select(Membership)
            .where(
                Membership.organization_id == organization_id,
                col(Membership.is_active).is_(True),
            )
            .order_by(col(Membership.joined_at).desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_active(
        self, organization_id: UUID, role: Optional[MemberRole] = None
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(Membership)
            .where(
                Membership.organization_id == organization_id,
                col(Membership.is_active).is_(True),
            )
        )
        if role is not None:
            stmt = stmt.where(Membership.role == role)
        result = await self.session.exec(stmt)
        return result.one()

    async def deactivate(self, membership: Membership) -> bool:
        stmt = update(Membership).where(
            col(Membership.id) == membership.id,
            col(Membership.is_active).is_(True),
        )
        if membership.role == MemberRole.admin:
            # Serializes admin removals per organization; SQLite already
            # serializes writers and drops FOR UPDATE.
            await self.session.exec(
                select(Organization.id)
                .where(Organization.id == membership.organization_id)
                .with_for_update()
            )
            other = aliased(Membership)
            other_admins = (
                select(func.count())
                .select_from(other)
                .where(
                    other.organization_id == membership.organization_id,
                    other.role == MemberRole.admin,
                    col(other.is_active).is_(True),
                    other.id != membership.id,
                )
                .scalar_subquery()
            )
            stmt = stmt.where(other_admins > 0)

        stmt = stmt.values(is_active=False, deactivated_at=utcnow()).execution_options(
            synchronize_session=False
        )
        result = await self.session.exec(stmt)
        await self.session.refresh(membership)
        return result.rowcount == 1

    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

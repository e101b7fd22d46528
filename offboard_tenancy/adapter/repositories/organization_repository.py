from typing import List, Optional
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from offboard_tenancy.app.repositories.organization_repository import (
    IOrganizationRepository,
)
from offboard_tenancy.domain.entities import Organization


class OrganizationRepository(IOrganizationRepository):
    """Organization repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, organization_id: UUID) -> Optional[Organization]:
        """Get organization by ID"""
        stmt = select(Organization).where(Organization.id == organization_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_ids(self, organization_ids: List[UUID]) -> List[Organization]:
        if not organization_ids:
            return []
        stmt = select(Organization).where(col(Organization.id).in_(organization_ids))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, organization: Organization) -> Organization:
        """Create a new organization"""
        self.session.add(organization)
        await self.session.flush()
        await self.session.refresh(organization)
        return organization

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from offboard_tenancy.app.repositories.trial_usage_repository import (
    ITrialUsageRepository,
)
from offboard_tenancy.domain.entities import TrialUsageRecord


class TrialUsageRepository(ITrialUsageRepository):
    """TrialUsageRecord repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[TrialUsageRecord]:
        stmt = select(TrialUsageRecord).where(TrialUsageRecord.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def count_by_domain_since(self, email_domain: str, since: datetime) -> int:
        stmt = (
            select(func.count())
            .select_from(TrialUsageRecord)
            .where(
                TrialUsageRecord.email_domain == email_domain,
                col(TrialUsageRecord.trial_started_at) >= since,
            )
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def get_by_user_id(self, user_id: UUID) -> Optional[TrialUsageRecord]:
        stmt = select(TrialUsageRecord).where(TrialUsageRecord.user_id == user_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, record: TrialUsageRecord) -> TrialUsageRecord:
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def update(self, record: TrialUsageRecord) -> TrialUsageRecord:
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from offboard_tenancy.domain.entities import TrialUsageRecord


class ITrialUsageRepository(ABC):
    """TrialUsageRecord repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[TrialUsageRecord]:
        """Get the trial record of an exact (lower-cased) email"""
        pass

    @abstractmethod
    async def count_by_domain_since(self, email_domain: str, since: datetime) -> int:
        """Trials started from a domain at or after `since`"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> Optional[TrialUsageRecord]:
        """Get the trial record started by a user"""
        pass

    @abstractmethod
    async def create(self, record: TrialUsageRecord) -> TrialUsageRecord:
        """Append a trial record"""
        pass

    @abstractmethod
    async def update(self, record: TrialUsageRecord) -> TrialUsageRecord:
        """Update converted_to_paid"""
        pass

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from offboard_tenancy.domain.entities import Organization


class IOrganizationRepository(ABC):
    """Organization repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, organization_id: UUID) -> Optional[Organization]:
        """Get organization by ID"""
        pass

    @abstractmethod
    async def get_by_ids(self, organization_ids: List[UUID]) -> List[Organization]:
        """Get several organizations at once"""
        pass

    @abstractmethod
    async def create(self, organization: Organization) -> Organization:
        """Create a new organization"""
        pass

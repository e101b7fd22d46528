from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from offboard_tenancy.domain.entities import Membership, MemberRole


class IMembershipRepository(ABC):
    """Membership repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, membership_id: UUID) -> Optional[Membership]:
        """Get membership by ID"""
        pass

    @abstractmethod
    async def get_by_user_and_organization(
        self, user_id: UUID, organization_id: UUID
    ) -> Optional[Membership]:
        """Get the (single) membership row for a user/organization pair"""
        pass

    @abstractmethod
    async def get_active_by_user_id(self, user_id: UUID) -> List[Membership]:
        """Active memberships of a user, newest first"""
        pass

    @abstractmethod
    async def get_active_by_organization_id(
        self, organization_id: UUID
    ) -> List[Membership]:
        """Active memberships of an organization, newest first"""
        pass

    @abstractmethod
    async def count_active(
        self, organization_id: UUID, role: Optional[MemberRole] = None
    ) -> int:
        """Count active memberships, optionally restricted to one role"""
        pass

    @abstractmethod
    async def deactivate(self, membership: Membership) -> bool:
        """
        Deactivate an active membership in one conditional write.

        An admin row is only deactivated while another active admin exists
        in the same organization. Returns False when nothing changed.
        """
        pass

    @abstractmethod
    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        pass

    @abstractmethod
    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        pass

from abc import ABC, abstractmethod
from typing import Any, List, Optional
from uuid import UUID

from offboard_tenancy.domain.entities import Invitation, InvitationStatus


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[Invitation]:
        """Get invitation by token"""
        pass

    @abstractmethod
    async def get_pending_by_organization_and_email(
        self, organization_id: UUID, email: str
    ) -> Optional[Invitation]:
        """Get pending invitation by organization and email"""
        pass

    @abstractmethod
    async def get_pending_by_organization_id(
        self, organization_id: UUID
    ) -> List[Invitation]:
        """All pending invitations of an organization"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        pass

    @abstractmethod
    async def transition(
        self,
        invitation: Invitation,
        to_status: InvitationStatus,
        **fields: Any,
    ) -> bool:
        """
        Move an invitation out of pending.

        Conditional on the stored status still being pending, so only one
        of several concurrent callers wins. Returns False for the losers.
        """
        pass

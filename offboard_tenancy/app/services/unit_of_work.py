from abc import ABC, abstractmethod

from offboard_tenancy.app.repositories.audit_event_repository import IAuditEventRepository
from offboard_tenancy.app.repositories.invitation_repository import IInvitationRepository
from offboard_tenancy.app.repositories.membership_repository import IMembershipRepository
from offboard_tenancy.app.repositories.organization_repository import (
    IOrganizationRepository,
)
from offboard_tenancy.app.repositories.trial_usage_repository import ITrialUsageRepository
from offboard_tenancy.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    organizations: IOrganizationRepository
    memberships: IMembershipRepository
    invitations: IInvitationRepository
    trial_usage: ITrialUsageRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass

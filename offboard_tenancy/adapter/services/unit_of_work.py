from sqlmodel.ext.asyncio.session import AsyncSession

from offboard_tenancy.adapter.repositories.audit_event_repository import AuditEventRepository
from offboard_tenancy.adapter.repositories.invitation_repository import InvitationRepository
from offboard_tenancy.adapter.repositories.membership_repository import MembershipRepository
from offboard_tenancy.adapter.repositories.organization_repository import (
    OrganizationRepository,
)
from offboard_tenancy.adapter.repositories.trial_usage_repository import TrialUsageRepository
from offboard_tenancy.adapter.repositories.user_repository import UserRepository
from offboard_tenancy.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.organizations = OrganizationRepository(self.session)
        self.memberships = MembershipRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.trial_usage = TrialUsageRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()

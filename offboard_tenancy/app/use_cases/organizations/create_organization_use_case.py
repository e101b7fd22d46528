"""
Create Organization Use Case

A signed-in user opens another organization and becomes its admin.
"""

from uuid import UUID

from offboard_tenancy.app.services.membership_store import MembershipStore
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.entities import AuditEvent, MemberRole, Organization
from offboard_tenancy.libs.result import Error, Result, Return

from .dtos import OrganizationResponse, OrganizationSummary


class CreateOrganizationUseCase:
    """
    Business Rules:
    - The creator owns the organization: its entitlements follow the
      creator's subscription
    - The creator gets an admin membership and is switched to it
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, name: str) -> Result[OrganizationResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            organization = await self.uow.organizations.create(
                Organization(name=name, owner_id=user.id)
            )

            store = MembershipStore(self.uow)
            created = await store.create_membership(
                user.id, organization.id, MemberRole.admin
            )
            if created.is_err():
                await self.uow.rollback()
                return Return.err(created.error)

            previous_organization_id = user.current_organization_id
            await store.set_current_organization(user, organization.id)

            audit = AuditEvent(
                organization_id=organization.id,
                user_id=user.id,
                action="organization_created",
                event_metadata={
                    "organization_name": organization.name,
                    "previous_organization_id": str(previous_organization_id)
                    if previous_organization_id
                    else None,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                OrganizationResponse(
                    organization=OrganizationSummary(
                        id=str(organization.id),
                        name=organization.name,
                        role=MemberRole.admin.value,
                        is_current=True,
                    )
                )
            )

"""
Switch Organization Use Case

Moves the user's current-organization pointer.
"""

from uuid import UUID

from offboard_tenancy.app.services.membership_store import MembershipStore
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.entities import AuditEvent
from offboard_tenancy.libs.result import Error, Result, Return

from .dtos import OrganizationResponse, OrganizationSummary


class SwitchOrganizationUseCase:
    """
    Use case for switching the current organization.

    Business Rules:
    - The user must hold an active membership in the target organization;
      otherwise NOT_A_MEMBER and the pointer is left untouched
    - Every organization-scoped request afterwards resolves to the target
    - Creates audit event for compliance tracking
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, target_organization_id: UUID
    ) -> Result[OrganizationResponse]:
        """
        Execute switch organization use case.

        Args:
            user_id: Current authenticated user ID
            target_organization_id: Organization to switch to

        Returns:
            Result with the organization now current, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            previous_organization_id = user.current_organization_id

            switched = await MembershipStore(self.uow).set_current_organization(
                user, target_organization_id
            )
            if switched.is_err():
                return Return.err(switched.error)
            membership = switched.value

            organization = await self.uow.organizations.get_by_id(target_organization_id)
            if organization is None:
                await self.uow.rollback()
                return Return.err(
                    Error("ORGANIZATION_NOT_FOUND", "Organization not found")
                )

            audit = AuditEvent(
                organization_id=target_organization_id,
                user_id=user_id,
                action="organization_switch",
                event_metadata={
                    "previous_organization_id": str(previous_organization_id)
                    if previous_organization_id
                    else None,
                    "new_organization_id": str(target_organization_id),
                    "organization_name": organization.name,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                OrganizationResponse(
                    organization=OrganizationSummary(
                        id=str(organization.id),
                        name=organization.name,
                        role=membership.role.value,
                        is_current=True,
                    )
                )
            )

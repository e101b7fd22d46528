"""
Remove Member Use Case

Handles deactivating (soft delete) members of an organization.
"""

from uuid import UUID

from offboard_tenancy.app.services.membership_store import MembershipStore
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.entities import AuditEvent
from offboard_tenancy.domain.permissions import Capability, has_capability
from offboard_tenancy.libs.result import Error, Result, Return

from .dtos import RemoveMemberResponse


class RemoveMemberUseCase:
    """
    Use case for removing members from an organization.

    Business Rules:
    - Admins (remove_members capability) may remove anyone
    - Any member may remove themselves (leave)
    - The last active admin cannot be removed (LAST_ADMIN)
    - Removal deactivates the row; the freed slot counts immediately
    - A removed user whose current organization this was is moved to
      another active membership, or to none
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, requester_user_id: UUID, organization_id: UUID, membership_id: UUID
    ) -> Result[RemoveMemberResponse]:
        """
        Execute remove member use case.

        Args:
            requester_user_id: User ID of the person removing the member
            organization_id: Requester's current organization
            membership_id: Membership to deactivate

        Returns:
            Result with RemoveMemberResponse DTO, or Error
        """
        async with self.uow:
            store = MembershipStore(self.uow)

            requester = await store.get_active(requester_user_id, organization_id)
            if requester is None:
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this organization")
                )

            target = await self.uow.memberships.get_by_id(membership_id)
            if target is None or target.organization_id != organization_id:
                return Return.err(
                    Error("MEMBERSHIP_NOT_FOUND", "Membership not found")
                )

            is_self_removal = target.user_id == requester_user_id
            if not is_self_removal and not has_capability(
                requester.role, Capability.remove_members
            ):
                return Return.err(
                    Error("PERMISSION_DENIED", "Only admins can remove members")
                )

            was_active = target.is_active
            deactivated = await store.deactivate_membership(membership_id)
            if deactivated.is_err():
                return Return.err(deactivated.error)

            if was_active:
                audit = AuditEvent(
                    organization_id=organization_id,
                    user_id=requester_user_id,
                    action="member_removed",
                    event_metadata={
                        "membership_id": str(target.id),
                        "removed_user_id": str(target.user_id),
                        "role": target.role.value,
                        "self_removal": is_self_removal,
                    },
                )
                await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                RemoveMemberResponse(status="removed", membership_id=str(target.id))
            )

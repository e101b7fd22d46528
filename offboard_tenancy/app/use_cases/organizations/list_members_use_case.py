"""
List Members Use Case

The team page: active members, pending invitations and remaining slots.
"""

from uuid import UUID

from offboard_tenancy.app.services.entitlements import load_entitlements
from offboard_tenancy.app.services.membership_store import MembershipStore
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.base import utcnow
from offboard_tenancy.libs.result import Error, Result, Return

from .dtos import EntitlementsInfo, MemberInfo, MembersResponse, PendingInvitationInfo


class ListMembersUseCase:
    """
    Business Rules:
    - Requester must be an active member of the organization
    - Deactivated members are not listed
    - Pending invitations past their expiry are not listed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, organization_id: UUID) -> Result[MembersResponse]:
        async with self.uow:
            store = MembershipStore(self.uow)
            if await store.get_active(user_id, organization_id) is None:
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this organization")
                )

            organization = await self.uow.organizations.get_by_id(organization_id)
            if organization is None:
                return Return.err(
                    Error("ORGANIZATION_NOT_FOUND", "Organization not found")
                )

            memberships = await store.list_active_for_organization(organization_id)
            users = await self.uow.users.get_by_ids([m.user_id for m in memberships])
            users_by_id = {u.id: u for u in users}

            members = []
            for membership in memberships:
                member = users_by_id.get(membership.user_id)
                members.append(
                    MemberInfo(
                        membership_id=str(membership.id),
                        user_id=str(membership.user_id),
                        email=member.email if member else "",
                        name=member.name if member else "",
                        role=membership.role.value,
                        joined_at=membership.joined_at.isoformat(),
                    )
                )

            now = utcnow()
            invitations = await self.uow.invitations.get_pending_by_organization_id(
                organization_id
            )
            pending = [
                PendingInvitationInfo(
                    invitation_id=str(i.id),
                    email=i.email,
                    role=i.role.value,
                    invited_by=str(i.invited_by),
                    created_at=i.created_at.isoformat(),
                    expires_at=i.expires_at.isoformat(),
                )
                for i in invitations
                if not i.is_expired(now)
            ]

            snapshot = await load_entitlements(self.uow, organization)

            return Return.ok(
                MembersResponse(
                    members=members,
                    pending_invitations=pending,
                    entitlements=EntitlementsInfo.from_snapshot(snapshot),
                )
            )

"""
Membership Store

Rules around membership rows and the current-organization pointer.
Runs inside the caller's UnitOfWork and never commits; the calling use
case owns the transaction.
"""

from typing import List, Optional
from uuid import UUID

from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.base import utcnow
from offboard_tenancy.domain.entities import Membership, MemberRole, User
from offboard_tenancy.libs.result import Error, Result, Return


class MembershipStore:
    """
    Business Rules:
    - At most one active membership per (user, organization)
    - Memberships are deactivated, never deleted
    - The last active admin of an organization cannot be deactivated
    - current_organization_id only ever points at an active membership
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def get_active(
        self, user_id: UUID, organization_id: UUID
    ) -> Optional[Membership]:
        membership = await self.uow.memberships.get_by_user_and_organization(
            user_id, organization_id
        )
        if membership is None or not membership.is_active:
            return None
        return membership

    async def list_active_for_user(self, user_id: UUID) -> List[Membership]:
        return await self.uow.memberships.get_active_by_user_id(user_id)

    async def list_active_for_organization(self, organization_id: UUID) -> List[Membership]:
        return await self.uow.memberships.get_active_by_organization_id(organization_id)

    async def count_active(self, organization_id: UUID) -> int:
        return await self.uow.memberships.count_active(organization_id)

    async def create_membership(
        self, user_id: UUID, organization_id: UUID, role: MemberRole
    ) -> Result[Membership]:
        """
        Insert an active membership.

        A previously deactivated row for the same pair is reactivated with
        the new role instead of inserting a second row.
        """
        existing = await self.uow.memberships.get_by_user_and_organization(
            user_id, organization_id
        )

        if existing is not None and existing.is_active:
            return Return.err(
                Error(
                    "ALREADY_MEMBER",
                    "User is already an active member of this organization",
                )
            )

        if existing is not None:
            existing.is_active = True
            existing.role = role
            existing.joined_at = utcnow()
            existing.deactivated_at = None
            return Return.ok(await self.uow.memberships.update(existing))

        membership = Membership(
            user_id=user_id,
            organization_id=organization_id,
            role=role,
            is_active=True,
        )
        return Return.ok(await self.uow.memberships.create(membership))

    async def deactivate_membership(self, membership_id: UUID) -> Result[Membership]:
        """Idempotent soft delete; moves the user's pointer off this organization."""
        membership = await self.uow.memberships.get_by_id(membership_id)
        if membership is None:
            return Return.err(Error("MEMBERSHIP_NOT_FOUND", "Membership not found"))

        if not membership.is_active:
            return Return.ok(membership)

        # The admin count is checked inside the UPDATE itself
        if not await self.uow.memberships.deactivate(membership):
            if not membership.is_active:
                return Return.ok(membership)
            return Return.err(
                Error(
                    "LAST_ADMIN",
                    "Cannot deactivate the last admin of an organization",
                    remediation="Invite another admin before removing this one.",
                )
            )

        user = await self.uow.users.get_by_id(membership.user_id)
        if user is not None and user.current_organization_id == membership.organization_id:
            remaining = await self.uow.memberships.get_active_by_user_id(user.id)
            user.current_organization_id = (
                remaining[0].organization_id if remaining else None
            )
            await self.uow.users.update(user)

        return Return.ok(membership)

    async def set_current_organization(
        self, user: User, organization_id: UUID
    ) -> Result[Membership]:
        membership = await self.get_active(user.id, organization_id)
        if membership is None:
            return Return.err(
                Error(
                    "NOT_A_MEMBER",
                    "You are not an active member of this organization",
                )
            )

        user.current_organization_id = organization_id
        await self.uow.users.update(user)
        return Return.ok(membership)

"""
Load Context Use Case

Loads the signed-in user's view of their current organization.
"""

from uuid import UUID

from offboard_tenancy.app.services.entitlements import load_entitlements
from offboard_tenancy.app.services.membership_store import MembershipStore
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.permissions import capabilities_for
from offboard_tenancy.libs.result import Error, Result, Return

from .dtos import (
    ContextResponse,
    EntitlementsInfo,
    OrganizationSummary,
    SubscriptionInfo,
    UserInfo,
)
from .list_organizations_use_case import summarize_memberships


class LoadContextUseCase:
    """
    Use case for loading current user and organization context.

    Business Rules:
    - User must exist (signup creates the row)
    - The organization comes from the user's current-organization pointer
    - A user without a current organization gets an empty context rather
      than an error, so the client can offer to create or join one
    - Entitlements are recomputed from the owner's billing fields
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[ContextResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            user_info = UserInfo(
                id=str(user.id),
                email=user.email,
                name=user.name,
                email_verified=user.email_verified,
            )
            organizations = await summarize_memberships(self.uow, user)

            membership = None
            organization = None
            if user.current_organization_id is not None:
                membership = await MembershipStore(self.uow).get_active(
                    user.id, user.current_organization_id
                )
                organization = await self.uow.organizations.get_by_id(
                    user.current_organization_id
                )

            if membership is None or organization is None:
                return Return.ok(
                    ContextResponse(
                        user=user_info, capabilities=[], organizations=organizations
                    )
                )

            snapshot = await load_entitlements(self.uow, organization)
            owner = await self.uow.users.get_by_id(organization.owner_id)

            return Return.ok(
                ContextResponse(
                    user=user_info,
                    current_organization=OrganizationSummary(
                        id=str(organization.id),
                        name=organization.name,
                        role=membership.role.value,
                        is_current=True,
                    ),
                    role=membership.role.value,
                    capabilities=sorted(c.value for c in capabilities_for(membership.role)),
                    subscription=SubscriptionInfo(
                        subscription_plan=owner.subscription_plan if owner else None,
                        subscription_status=owner.subscription_status if owner else None,
                        trial_ends_at=owner.trial_ends_at.isoformat()
                        if owner and owner.trial_ends_at
                        else None,
                    ),
                    entitlements=EntitlementsInfo.from_snapshot(snapshot),
                    organizations=organizations,
                )
            )

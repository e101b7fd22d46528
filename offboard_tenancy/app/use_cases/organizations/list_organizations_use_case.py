"""
List Organizations Use Case

Organizations the user can switch between.
"""

from typing import List
from uuid import UUID

from offboard_tenancy.app.services.membership_store import MembershipStore
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.entities import User
from offboard_tenancy.libs.result import Error, Result, Return

from .dtos import OrganizationListResponse, OrganizationSummary


async def summarize_memberships(uow: UnitOfWork, user: User) -> List[OrganizationSummary]:
    """Active memberships of a user as organization summaries, by name."""
    memberships = await MembershipStore(uow).list_active_for_user(user.id)
    organizations = await uow.organizations.get_by_ids(
        [m.organization_id for m in memberships]
    )
    by_id = {o.id: o for o in organizations}

    summaries = [
        OrganizationSummary(
            id=str(m.organization_id),
            name=by_id[m.organization_id].name,
            role=m.role.value,
            is_current=m.organization_id == user.current_organization_id,
        )
        for m in memberships
        if m.organization_id in by_id
    ]
    return sorted(summaries, key=lambda s: s.name.lower())


class ListOrganizationsUseCase:
    """
    Business Rules:
    - Only active memberships are listed
    - The current organization is flagged
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[OrganizationListResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            organizations = await summarize_memberships(self.uow, user)

            return Return.ok(
                OrganizationListResponse(
                    organizations=organizations,
                    current_organization_id=str(user.current_organization_id)
                    if user.current_organization_id
                    else None,
                )
            )

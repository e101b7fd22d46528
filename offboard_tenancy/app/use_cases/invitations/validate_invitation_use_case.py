"""
Validate Invitation Use Case

Looks up an invitation by its token so the invitee can see what they
are joining before they authenticate.
"""

from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.base import utcnow
from offboard_tenancy.libs.result import Error, Result, Return

from .dtos import InvitationDetailsResponse
from .lookup import check_invitation_usable


class ValidateInvitationUseCase:
    """
    Business Rules:
    - Lookup is by token only
    - Missing token -> INVITATION_NOT_FOUND
    - Accepted or cancelled -> INVITATION_ALREADY_USED
    - Past expires_at -> INVITATION_EXPIRED (status flipped to expired once)
    - Read-only otherwise
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[InvitationDetailsResponse]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_token(token)

            error = await check_invitation_usable(self.uow, invitation, utcnow())
            if error is not None:
                return Return.err(error)

            organization = await self.uow.organizations.get_by_id(
                invitation.organization_id
            )
            if organization is None:
                return Return.err(
                    Error("ORGANIZATION_NOT_FOUND", "Organization not found")
                )

            return Return.ok(
                InvitationDetailsResponse(
                    email=invitation.email,
                    role=invitation.role.value,
                    organization_id=str(organization.id),
                    organization_name=organization.name,
                    expires_at=invitation.expires_at.isoformat(),
                )
            )

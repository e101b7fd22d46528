"""
Resend Invitation Use Case

Handles resending pending invitations and pushing out their expiry.
"""

import logging
from uuid import UUID

from offboard_tenancy.app.services.email_dispatcher import (
    INVITATION_EMAIL,
    IEmailDispatcher,
)
from offboard_tenancy.app.services.membership_store import MembershipStore
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.base import utcnow
from offboard_tenancy.domain.entities import AuditEvent
from offboard_tenancy.domain.permissions import Capability, has_capability
from offboard_tenancy.libs.result import Error, Result, Return

from .dtos import ResendInvitationResponse
from .lookup import INVITATION_TTL, build_invite_link, check_invitation_usable

logger = logging.getLogger(__name__)


class ResendInvitationUseCase:
    """
    Use case for resending pending invitations.

    Business Rules:
    - Requester needs the invite_users capability
    - Only pending, unexpired invitations can be resent; the same token
      is reused and expiry moves to 7 days from now
    - A pending invitation past its deadline is flipped to expired, like
      any other read of it
    """

    def __init__(self, uow: UnitOfWork, email_dispatcher: IEmailDispatcher, app_url: str):
        self.uow = uow
        self.email_dispatcher = email_dispatcher
        self.app_url = app_url

    async def execute(
        self, user_id: UUID, organization_id: UUID, invitation_id: UUID
    ) -> Result[ResendInvitationResponse]:
        async with self.uow:
            membership = await MembershipStore(self.uow).get_active(
                user_id, organization_id
            )
            if membership is None or not has_capability(
                membership.role, Capability.invite_users
            ):
                return Return.err(
                    Error(
                        "PERMISSION_DENIED",
                        "Only admins and HR managers can resend invitations",
                    )
                )

            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None or invitation.organization_id != organization_id:
                return Return.err(
                    Error("INVITATION_NOT_FOUND", "Invitation not found")
                )

            error = await check_invitation_usable(self.uow, invitation, utcnow())
            if error is not None:
                return Return.err(error)

            organization = await self.uow.organizations.get_by_id(organization_id)
            inviter = await self.uow.users.get_by_id(user_id)

            invitation.expires_at = utcnow() + INVITATION_TTL
            invitation = await self.uow.invitations.update(invitation)

            audit = AuditEvent(
                organization_id=organization_id,
                user_id=user_id,
                action="invitation_resent",
                event_metadata={
                    "invitation_id": str(invitation.id),
                    "email": invitation.email,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

        invite_link = build_invite_link(self.app_url, invitation.token)
        result = await self.email_dispatcher.send(
            INVITATION_EMAIL,
            [invitation.email],
            {
                "organizationName": organization.name if organization else "",
                "inviterName": (inviter.name or inviter.email) if inviter else "",
                "role": invitation.role.value,
                "inviteLink": invite_link,
                "expiresAt": invitation.expires_at.isoformat(),
            },
        )
        if not result.success:
            logger.warning("Resend of invitation %s failed to dispatch", invitation.id)

        return Return.ok(
            ResendInvitationResponse(
                status="resent",
                expires_at=invitation.expires_at.isoformat(),
                email_sent=result.success,
                invite_link=invite_link,
            )
        )

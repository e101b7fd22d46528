"""
Cancel Invitation Use Case

Handles cancelling pending invitations.
"""

from uuid import UUID

from offboard_tenancy.app.services.membership_store import MembershipStore
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.base import utcnow
from offboard_tenancy.domain.entities import AuditEvent, InvitationStatus
from offboard_tenancy.domain.permissions import Capability, has_capability
from offboard_tenancy.libs.result import Error, Result, Return

from .dtos import CancelInvitationResponse


class CancelInvitationUseCase:
    """
    Use case for cancelling pending invitations.

    Business Rules:
    - Admins may cancel any invitation of their organization
    - Other members may cancel only invitations they sent
    - Invitations of another organization look like they do not exist
    - Only pending invitations can be cancelled
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, organization_id: UUID, invitation_id: UUID
    ) -> Result[CancelInvitationResponse]:
        async with self.uow:
            membership = await MembershipStore(self.uow).get_active(
                user_id, organization_id
            )
            if membership is None:
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this organization")
                )

            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None or invitation.organization_id != organization_id:
                return Return.err(
                    Error("INVITATION_NOT_FOUND", "Invitation not found")
                )

            if invitation.invited_by != user_id and not has_capability(
                membership.role, Capability.cancel_invitations
            ):
                return Return.err(
                    Error(
                        "PERMISSION_DENIED",
                        "Only admins or the original inviter can cancel an invitation",
                    )
                )

            if invitation.status != InvitationStatus.pending:
                return Return.err(
                    Error(
                        "INVITATION_ALREADY_USED",
                        f"Cannot cancel an invitation that is {invitation.status.value}",
                    )
                )

            cancelled = await self.uow.invitations.transition(
                invitation, InvitationStatus.cancelled, cancelled_at=utcnow()
            )
            if not cancelled:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        "INVITATION_ALREADY_USED",
                        "This invitation was accepted or cancelled concurrently",
                    )
                )

            audit = AuditEvent(
                organization_id=organization_id,
                user_id=user_id,
                action="invitation_cancelled",
                event_metadata={
                    "invitation_id": str(invitation.id),
                    "email": invitation.email,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                CancelInvitationResponse(status=InvitationStatus.cancelled.value)
            )

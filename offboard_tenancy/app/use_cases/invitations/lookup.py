"""
Shared invitation checks.

Expiry is evaluated lazily here: the first read after expires_at flips a
pending invitation to expired and commits that flip, so later reads keep
answering INVITATION_EXPIRED rather than INVITATION_NOT_FOUND.
"""

from datetime import datetime, timedelta
from typing import Optional

from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.entities import Invitation, InvitationStatus
from offboard_tenancy.libs.result import Error

INVITATION_TTL = timedelta(days=7)


def build_invite_link(app_url: str, token: str) -> str:
    return f"{app_url.rstrip('/')}/accept-invite?token={token}"


async def check_invitation_usable(
    uow: UnitOfWork, invitation: Optional[Invitation], now: datetime
) -> Optional[Error]:
    """Return the error that prevents using this invitation, or None."""
    if invitation is None:
        return Error("INVITATION_NOT_FOUND", "Invalid or non-existent invitation")

    # Terminal states win over the clock: accepted stays accepted
    if invitation.status in (InvitationStatus.accepted, InvitationStatus.cancelled):
        return Error(
            "INVITATION_ALREADY_USED",
            "This invitation has already been used or was cancelled",
        )

    if invitation.status == InvitationStatus.expired:
        return Error("INVITATION_EXPIRED", "This invitation has expired")

    if invitation.is_expired(now):
        await uow.invitations.transition(invitation, InvitationStatus.expired)
        await uow.commit()
        return Error("INVITATION_EXPIRED", "This invitation has expired")

    return None

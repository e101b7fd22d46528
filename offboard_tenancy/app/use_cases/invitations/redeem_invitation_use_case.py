"""
Redeem Invitation Use Case

Turns a pending invitation into a membership for the authenticated
identity the invitation was addressed to.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from offboard_tenancy.app.services.membership_store import MembershipStore
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.base import normalize_email, utcnow
from offboard_tenancy.domain.entities import AuditEvent, InvitationStatus, User
from offboard_tenancy.libs.result import Error, Result, Return

from .dtos import InvitationRedeemedResponse, OrganizationInfo
from .lookup import check_invitation_usable

WRONG_ACCOUNT_REMEDIATION = (
    "Sign out and sign back in as {invited}, or create a new account with "
    "that email address, then open the invitation link again."
)


class RedeemInvitationUseCase:
    """
    Use case for accepting an organization invitation.

    Business Rules:
    - Re-runs every validation check on the token
    - The authenticated email must equal the invited email
      (case-insensitive); otherwise WRONG_ACCOUNT and nothing changes
    - Identities without a local user row get one (new account flow)
    - Existing active membership is reused, inactive one reactivated
    - Sets the organization as current only if the user has none
    - pending -> accepted is a conditional update: of two concurrent
      redemptions exactly one wins, the other gets INVITATION_ALREADY_USED
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        token: str,
        user_id: UUID,
        email: str,
        email_verified: bool = False,
        name: Optional[str] = None,
    ) -> Result[InvitationRedeemedResponse]:
        """
        Execute redeem invitation use case.

        Args:
            token: Invitation token from the link
            user_id: Authenticated identity's user id
            email: Authenticated identity's email
            email_verified: Identity provider's verification flag
            name: Display name for a first-time user row

        Returns:
            Result with InvitationRedeemedResponse DTO, or Error
        """
        async with self.uow:
            now = utcnow()
            invitation = await self.uow.invitations.get_by_token(token)

            error = await check_invitation_usable(self.uow, invitation, now)
            if error is not None:
                return Return.err(error)

            if normalize_email(email) != normalize_email(invitation.email):
                return Return.err(
                    Error(
                        "WRONG_ACCOUNT",
                        f"This invitation is for {invitation.email}, but you are "
                        f"signed in as {normalize_email(email)}",
                        remediation=WRONG_ACCOUNT_REMEDIATION.format(
                            invited=invitation.email
                        ),
                    )
                )

            organization = await self.uow.organizations.get_by_id(
                invitation.organization_id
            )
            if organization is None:
                return Return.err(
                    Error("ORGANIZATION_NOT_FOUND", "Organization not found")
                )

            user = await self.uow.users.get_by_id(user_id)
            is_new_user = user is None
            if user is None:
                other = await self.uow.users.get_by_email(normalize_email(email))
                if other is not None:
                    return Return.err(
                        Error(
                            "ALREADY_REGISTERED",
                            "This email belongs to a different account",
                        )
                    )
                user = await self.uow.users.create(
                    User(
                        id=user_id,
                        email=normalize_email(email),
                        name=name or "",
                        email_verified=email_verified,
                    )
                )

            won = await self.uow.invitations.transition(
                invitation,
                InvitationStatus.accepted,
                accepted_at=now,
                accepted_by=user.id,
            )
            if not won:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        "INVITATION_ALREADY_USED",
                        "This invitation has already been used or was cancelled",
                    )
                )

            store = MembershipStore(self.uow)
            try:
                membership = await store.get_active(user.id, organization.id)
                if membership is None:
                    created = await store.create_membership(
                        user.id, organization.id, invitation.role
                    )
                    if created.is_err():
                        await self.uow.rollback()
                        return Return.err(created.error)
                    membership = created.value

                if user.current_organization_id is None:
                    await store.set_current_organization(user, organization.id)

                audit = AuditEvent(
                    organization_id=organization.id,
                    user_id=user.id,
                    action="invitation_accepted",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "membership_id": str(membership.id),
                        "is_new_user": is_new_user,
                        "role": membership.role.value,
                    },
                )
                await self.uow.audit_events.create(audit)

                await self.uow.commit()
            except IntegrityError:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        "ALREADY_MEMBER",
                        "A membership for this organization was created concurrently",
                    )
                )

            return Return.ok(
                InvitationRedeemedResponse(
                    status=InvitationStatus.accepted.value,
                    organization=OrganizationInfo(
                        id=str(organization.id),
                        name=organization.name,
                        role=membership.role.value,
                    ),
                    membership_id=str(membership.id),
                    is_current_organization=(
                        user.current_organization_id == organization.id
                    ),
                )
            )

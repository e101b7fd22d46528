"""
Issue Invitation Use Case

Handles inviting an email address to join an organization with a role.
"""

import logging
import secrets
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from offboard_tenancy.app.services.email_dispatcher import (
    INVITATION_EMAIL,
    IEmailDispatcher,
)
from offboard_tenancy.app.services.entitlements import load_entitlements
from offboard_tenancy.app.services.membership_store import MembershipStore
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.base import normalize_email, utcnow
from offboard_tenancy.domain.entitlements import member_limit_remediation
from offboard_tenancy.domain.entities import (
    AuditEvent,
    Invitation,
    InvitationStatus,
    MemberRole,
    Organization,
    User,
)
from offboard_tenancy.domain.permissions import Capability, has_capability, parse_role
from offboard_tenancy.libs.result import Error, Result, Return

from .dtos import InvitationIssuedResponse
from .lookup import INVITATION_TTL, build_invite_link

logger = logging.getLogger(__name__)


class IssueInvitationUseCase:
    """
    Use case for inviting users to join an organization.

    Business Rules:
    - Inviter needs the invite_users capability (admin, hr_manager)
    - The organization's plan must have a free member slot
    - Existing active members cannot be invited again
    - Only one unexpired pending invitation per email and organization
    - Token is generated here, never supplied by the client
    - Invitation expires 7 days after creation
    - Email is dispatched after commit; a failed dispatch keeps the invitation
    """

    def __init__(self, uow: UnitOfWork, email_dispatcher: IEmailDispatcher, app_url: str):
        self.uow = uow
        self.email_dispatcher = email_dispatcher
        self.app_url = app_url

    async def execute(
        self, organization_id: UUID, inviter_user_id: UUID, email: str, role: str
    ) -> Result[InvitationIssuedResponse]:
        """
        Execute issue invitation use case.

        Args:
            organization_id: Inviter's current organization
            inviter_user_id: User ID of the person sending the invite
            email: Email address to invite
            role: Role to grant on acceptance

        Returns:
            Result with InvitationIssuedResponse DTO, or Error
        """
        async with self.uow:
            try:
                member_role = parse_role(role)
            except ValueError:
                valid = ", ".join(r.value for r in MemberRole)
                return Return.err(
                    Error("INVALID_ROLE", f"Invalid role: {role}. Must be one of: {valid}")
                )

            email = normalize_email(email)
            now = utcnow()

            organization = await self.uow.organizations.get_by_id(organization_id)
            if organization is None:
                return Return.err(
                    Error("ORGANIZATION_NOT_FOUND", "Organization not found")
                )

            store = MembershipStore(self.uow)

            inviter_membership = await store.get_active(inviter_user_id, organization_id)
            if inviter_membership is None or not has_capability(
                inviter_membership.role, Capability.invite_users
            ):
                return Return.err(
                    Error(
                        "PERMISSION_DENIED",
                        "Only admins and HR managers can invite users",
                    )
                )

            entitlements = await load_entitlements(self.uow, organization)
            if not entitlements.can_invite_more_members():
                return Return.err(
                    Error(
                        "LIMIT_REACHED",
                        "Your organization has reached its team member limit",
                        reason=(
                            f"{entitlements.active_member_count} active members on the "
                            f"{entitlements.limits.name} plan"
                        ),
                        remediation=member_limit_remediation(
                            entitlements.effective_plan.value
                        ),
                    )
                )

            existing_user = await self.uow.users.get_by_email(email)
            if existing_user is not None:
                if await store.get_active(existing_user.id, organization_id):
                    return Return.err(
                        Error(
                            "ALREADY_MEMBER",
                            "User is already a member of this organization",
                        )
                    )

            pending = await self.uow.invitations.get_pending_by_organization_and_email(
                organization_id, email
            )
            if pending is not None:
                if not pending.is_expired(now):
                    return Return.err(
                        Error(
                            "INVITE_ALREADY_EXISTS",
                            "A pending invitation already exists for this email",
                        )
                    )
                await self.uow.invitations.transition(pending, InvitationStatus.expired)

            invitation = Invitation(
                organization_id=organization_id,
                email=email,
                role=member_role,
                token=secrets.token_urlsafe(32),
                status=InvitationStatus.pending,
                invited_by=inviter_user_id,
                created_at=now,
                expires_at=now + INVITATION_TTL,
            )
            try:
                invitation = await self.uow.invitations.create(invitation)
            except IntegrityError:
                # A concurrent request stored the pending invitation first
                await self.uow.rollback()
                return Return.err(
                    Error(
                        "INVITE_ALREADY_EXISTS",
                        "A pending invitation already exists for this email",
                    )
                )

            audit = AuditEvent(
                organization_id=organization_id,
                user_id=inviter_user_id,
                action="invite_sent",
                event_metadata={
                    "invitation_id": str(invitation.id),
                    "invited_email": email,
                    "role": member_role.value,
                },
            )
            await self.uow.audit_events.create(audit)

            inviter = await self.uow.users.get_by_id(inviter_user_id)

            await self.uow.commit()

        invite_link = build_invite_link(self.app_url, invitation.token)
        email_sent = await self._send_invitation_email(
            invitation, organization, inviter, invite_link
        )

        return Return.ok(
            InvitationIssuedResponse(
                invitation_id=str(invitation.id),
                email=invitation.email,
                role=invitation.role.value,
                status=invitation.status.value,
                expires_at=invitation.expires_at.isoformat(),
                token=invitation.token,
                invite_link=invite_link,
                email_sent=email_sent,
            )
        )

    async def _send_invitation_email(
        self,
        invitation: Invitation,
        organization: Organization,
        inviter: User,
        invite_link: str,
    ) -> bool:
        result = await self.email_dispatcher.send(
            INVITATION_EMAIL,
            [invitation.email],
            {
                "organizationName": organization.name,
                "inviterName": (inviter.name or inviter.email) if inviter else "",
                "role": invitation.role.value,
                "inviteLink": invite_link,
                "expiresAt": invitation.expires_at.isoformat(),
            },
        )
        if not result.success:
            logger.warning(
                "Invitation %s stored but email dispatch failed", invitation.id
            )
        return result.success

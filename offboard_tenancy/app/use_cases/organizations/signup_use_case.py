"""
Signup Use Case

Creates the local account of a freshly registered identity together with
its first organization and trial.
"""

import logging

from sqlalchemy.exc import IntegrityError

from offboard_tenancy.app.services.membership_store import MembershipStore
from offboard_tenancy.app.services.trial_eligibility import TrialEligibilityGuard
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.base import normalize_email
from offboard_tenancy.domain.entities import (
    AuditEvent,
    MemberRole,
    Organization,
    User,
)
from offboard_tenancy.libs.result import Error, Result, Return

from .dtos import (
    OrganizationSummary,
    SignupCommand,
    SignupResponse,
    SubscriptionInfo,
    UserInfo,
)

logger = logging.getLogger(__name__)


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand (identity claims + organization name)
    - Output: Result[SignupResponse]

    Business Logic:
    1. Identity id or email already has an account -> ALREADY_REGISTERED
    2. Re-check trial eligibility -> TRIAL_NOT_ELIGIBLE with the reason
    3. Create User, Organization (owned by the user), admin Membership
    4. Point the user's current organization at it
    5. Start the trial and append the TrialUsageRecord
    6. AuditEvent(action=signup), commit atomically

    A concurrent signup with the same email loses on the unique
    trial_usage.email column and gets TRIAL_ALREADY_USED.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: SignupCommand) -> Result[SignupResponse]:
        email = normalize_email(command.email)

        async with self.uow:
            existing = await self.uow.users.get_by_id(command.user_id)
            if existing is None:
                existing = await self.uow.users.get_by_email(email)
            if existing is not None:
                return Return.err(
                    Error("ALREADY_REGISTERED", "An account with this email already exists")
                )

            guard = TrialEligibilityGuard(self.uow)
            eligibility = await guard.check_eligibility(email)
            if not eligibility.eligible:
                return Return.err(
                    Error(
                        "TRIAL_NOT_ELIGIBLE",
                        eligibility.reason or "Not eligible for trial",
                        reason=eligibility.reason,
                    )
                )

            try:
                user = await self.uow.users.create(
                    User(
                        id=command.user_id,
                        email=email,
                        name=command.name,
                        email_verified=command.email_verified,
                    )
                )

                organization = await self.uow.organizations.create(
                    Organization(name=command.organization_name, owner_id=user.id)
                )

                store = MembershipStore(self.uow)
                created = await store.create_membership(
                    user.id, organization.id, MemberRole.admin
                )
                if created.is_err():
                    await self.uow.rollback()
                    return Return.err(created.error)
                membership = created.value

                await store.set_current_organization(user, organization.id)
                await guard.start_trial(user)

                audit = AuditEvent(
                    organization_id=organization.id,
                    user_id=user.id,
                    action="signup",
                    event_metadata={
                        "email": email,
                        "organization_name": organization.name,
                        "trial_ends_at": user.trial_ends_at.isoformat(),
                    },
                )
                await self.uow.audit_events.create(audit)

                await self.uow.commit()
            except IntegrityError:
                await self.uow.rollback()
                logger.warning("Concurrent signup lost the trial race for %s", email)
                return Return.err(
                    Error(
                        "TRIAL_ALREADY_USED",
                        "This email has already been used for a free trial",
                    )
                )

            return Return.ok(
                SignupResponse(
                    user=UserInfo(
                        id=str(user.id),
                        email=user.email,
                        name=user.name,
                        email_verified=user.email_verified,
                    ),
                    organization=OrganizationSummary(
                        id=str(organization.id),
                        name=organization.name,
                        role=membership.role.value,
                        is_current=True,
                    ),
                    subscription=SubscriptionInfo(
                        subscription_plan=user.subscription_plan,
                        subscription_status=user.subscription_status,
                        trial_ends_at=user.trial_ends_at.isoformat(),
                    ),
                )
            )

"""
End Expired Trials Use Case

Scheduled downgrade of users whose trial period is over.
"""

import logging
from datetime import datetime
from typing import Optional

from offboard_tenancy.app.services.email_dispatcher import (
    TRIAL_ENDED_EMAIL,
    IEmailDispatcher,
)
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.base import utcnow
from offboard_tenancy.domain.entities import AuditEvent, SubscriptionStatus
from offboard_tenancy.libs.result import Result, Return

from .dtos import EndExpiredTrialsResponse

logger = logging.getLogger(__name__)


class EndExpiredTrialsUseCase:
    """
    Use case for ending trials past their end date.

    Business Rules:
    - Only users still marked trialing with trial_ends_at < now are touched
    - Status becomes trial_ended and the plan is cleared, so entitlements
      fall back to the free tier
    - Re-running is harmless: downgraded users are no longer trialing
    - One trial_ended email per downgraded user, sent after commit
    """

    def __init__(self, uow: UnitOfWork, email_dispatcher: IEmailDispatcher, app_url: str):
        self.uow = uow
        self.email_dispatcher = email_dispatcher
        self.app_url = app_url

    async def execute(
        self, now: Optional[datetime] = None
    ) -> Result[EndExpiredTrialsResponse]:
        now = now or utcnow()

        async with self.uow:
            users = await self.uow.users.get_expired_trials(now)
            downgraded = []

            for user in users:
                user.subscription_status = SubscriptionStatus.trial_ended.value
                user.subscription_plan = None
                await self.uow.users.update(user)

                audit = AuditEvent(
                    organization_id=user.current_organization_id,
                    user_id=user.id,
                    action="trial_ended",
                    event_metadata={
                        "trial_ends_at": user.trial_ends_at.isoformat()
                        if user.trial_ends_at
                        else None,
                    },
                )
                await self.uow.audit_events.create(audit)
                downgraded.append((user.email, user.name))

            await self.uow.commit()

        logger.info("Downgraded %d expired trials", len(downgraded))

        upgrade_link = f"{self.app_url.rstrip('/')}/pricing"
        emails_sent = 0
        for email, name in downgraded:
            result = await self.email_dispatcher.send(
                TRIAL_ENDED_EMAIL,
                [email],
                {"userName": name or "there", "upgradeLink": upgrade_link},
            )
            if result.success:
                emails_sent += 1
            else:
                logger.warning("Trial ended email to %s failed to dispatch", email)

        return Return.ok(
            EndExpiredTrialsResponse(
                downgraded=len(downgraded),
                emails_sent=emails_sent,
                user_emails=[email for email, _ in downgraded],
            )
        )

"""
Trial Eligibility Guard

Decides whether an email may start a trial and records trial starts.
Both run inside the caller's UnitOfWork so the check and the insert share
one transaction; the unique email column on trial_usage closes the
remaining race between concurrent signups.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.base import normalize_email, utcnow
from offboard_tenancy.domain.entitlements import TRIAL_PLAN
from offboard_tenancy.domain.entities import SubscriptionStatus, TrialUsageRecord, User
from offboard_tenancy.domain.trial_policy import (
    DISPOSABLE_EMAIL_DOMAINS,
    DOMAIN_TRIAL_LIMIT,
    DOMAIN_TRIAL_WINDOW,
    REASON_ALREADY_USED,
    REASON_DISPOSABLE,
    REASON_DOMAIN_LIMIT,
    REASON_INVALID_EMAIL,
    REASON_SYSTEM_ERROR,
    TRIAL_DURATION_DAYS,
    extract_email_domain,
    hash_email,
)

logger = logging.getLogger(__name__)


class TrialEligibility(BaseModel):
    eligible: bool
    reason: Optional[str] = None


class TrialEligibilityGuard:
    """
    Rules, first failure wins:
    1. Disposable email domain
    2. Email already used for a trial (forever)
    3. Domain started DOMAIN_TRIAL_LIMIT trials within DOMAIN_TRIAL_WINDOW

    Store failures deny the trial.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def check_eligibility(
        self, email: str, now: Optional[datetime] = None
    ) -> TrialEligibility:
        now = now or utcnow()
        email = normalize_email(email)
        domain = extract_email_domain(email)

        if not domain:
            return TrialEligibility(eligible=False, reason=REASON_INVALID_EMAIL)

        if domain in DISPOSABLE_EMAIL_DOMAINS:
            return TrialEligibility(
                eligible=False, reason=REASON_DISPOSABLE.format(domain=domain)
            )

        try:
            previous = await self.uow.trial_usage.get_by_email(email)
            if previous is not None:
                return TrialEligibility(eligible=False, reason=REASON_ALREADY_USED)

            recent = await self.uow.trial_usage.count_by_domain_since(
                domain, now - DOMAIN_TRIAL_WINDOW
            )
        except SQLAlchemyError:
            logger.exception("Trial eligibility check failed for domain %s", domain)
            return TrialEligibility(eligible=False, reason=REASON_SYSTEM_ERROR)

        if recent >= DOMAIN_TRIAL_LIMIT:
            logger.warning(
                "Trial domain limit reached for %s (%d in window)", domain, recent
            )
            return TrialEligibility(
                eligible=False, reason=REASON_DOMAIN_LIMIT.format(domain=domain)
            )

        return TrialEligibility(eligible=True)

    async def start_trial(
        self, user: User, now: Optional[datetime] = None
    ) -> TrialUsageRecord:
        """
        Put the user on the trial plan and append the usage record.

        Callers must have obtained an eligible result in the same
        transaction. Raises IntegrityError when the email already has a
        record (concurrent signup).
        """
        now = now or utcnow()
        email = normalize_email(user.email)

        user.subscription_plan = TRIAL_PLAN.value
        user.subscription_status = SubscriptionStatus.trialing.value
        user.trial_started_at = now
        user.trial_ends_at = now + timedelta(days=TRIAL_DURATION_DAYS)
        await self.uow.users.update(user)

        record = TrialUsageRecord(
            user_id=user.id,
            email=email,
            email_domain=extract_email_domain(email),
            email_hash=hash_email(email),
            trial_started_at=now,
        )
        return await self.uow.trial_usage.create(record)

"""
Sync Subscription Use Case

Applies a billing provider's view of a user's subscription.
"""

import logging
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.entities import (
    AuditEvent,
    SubscriptionPlan,
    SubscriptionStatus,
)
from offboard_tenancy.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class SubscriptionSyncedResponse(BaseModel):
    """Response for sync subscription use case"""

    user_id: str
    subscription_plan: Optional[str] = None
    subscription_status: str
    converted_to_paid: bool


class SyncSubscriptionUseCase:
    """
    Use case for recording billing status changes.

    Business Rules:
    - Status must be a known subscription status
    - Plan, when given, must be a known tier; when omitted the stored
      plan is kept
    - Becoming active marks the user's trial record converted_to_paid
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, subscription_status: str, subscription_plan: Optional[str] = None
    ) -> Result[SubscriptionSyncedResponse]:
        try:
            status = SubscriptionStatus(subscription_status)
        except ValueError:
            return Return.err(
                Error("INVALID_STATUS", f"Unknown subscription status: {subscription_status}")
            )

        plan = None
        if subscription_plan is not None:
            try:
                plan = SubscriptionPlan(subscription_plan)
            except ValueError:
                return Return.err(
                    Error("INVALID_PLAN", f"Unknown subscription plan: {subscription_plan}")
                )

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            previous_status = user.subscription_status
            user.subscription_status = status.value
            if plan is not None:
                user.subscription_plan = plan.value
            await self.uow.users.update(user)

            converted = False
            if status == SubscriptionStatus.active:
                record = await self.uow.trial_usage.get_by_user_id(user.id)
                if record is not None and not record.converted_to_paid:
                    record.converted_to_paid = True
                    await self.uow.trial_usage.update(record)
                    converted = True

            audit = AuditEvent(
                organization_id=user.current_organization_id,
                user_id=user.id,
                action="subscription_synced",
                event_metadata={
                    "previous_status": previous_status,
                    "status": status.value,
                    "plan": user.subscription_plan,
                    "converted_to_paid": converted,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

        logger.info(
            "Subscription of user %s is now %s (%s)",
            user.id,
            user.subscription_status,
            user.subscription_plan,
        )

        return Return.ok(
            SubscriptionSyncedResponse(
                user_id=str(user.id),
                subscription_plan=user.subscription_plan,
                subscription_status=user.subscription_status,
                converted_to_paid=converted,
            )
        )

"""
Admin API Routes - Scheduler and Billing Endpoints

Authentication is via Admin API Key, not identity tokens.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from offboard_tenancy.api.error import ClientError, ServerError
from offboard_tenancy.api.utils.admin_auth import verify_admin_api_key
from offboard_tenancy.app.services.email_dispatcher import IEmailDispatcher
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.app.use_cases.billing import (
    SubscriptionSyncedResponse,
    SyncSubscriptionUseCase,
)
from offboard_tenancy.app.use_cases.trials import (
    EndExpiredTrialsResponse,
    EndExpiredTrialsUseCase,
)
from offboard_tenancy.depends import get_app_url, get_email_dispatcher, get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


class SyncSubscriptionRequest(BaseModel):
    subscription_status: str = Field(..., description="active, trialing, past_due, canceled")
    subscription_plan: Optional[str] = Field(
        None, description="free, starter, professional, enterprise; omitted keeps the stored plan"
    )


@router.post(
    "/trials/expire",
    status_code=status.HTTP_200_OK,
    response_model=EndExpiredTrialsResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def end_expired_trials(
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_dispatcher: IEmailDispatcher = Depends(get_email_dispatcher),
    app_url: str = Depends(get_app_url),
):
    """
    End Expired Trials

    Scheduler endpoint: downgrades every trial past its end date.

    Requires: X-Admin-API-Key header
    """
    use_case = EndExpiredTrialsUseCase(uow, email_dispatcher, app_url)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.put(
    "/subscriptions/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=SubscriptionSyncedResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def sync_subscription(
    user_id: UUID,
    request: SyncSubscriptionRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Sync Subscription

    Billing endpoint: records the provider's plan and status for a user.

    Requires: X-Admin-API-Key header

    Raises:
        - 400 Bad Request: INVALID_STATUS, INVALID_PLAN
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: USER_NOT_FOUND
    """
    use_case = SyncSubscriptionUseCase(uow)
    result = await use_case.execute(
        user_id, request.subscription_status, request.subscription_plan
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_STATUS", "INVALID_PLAN"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value

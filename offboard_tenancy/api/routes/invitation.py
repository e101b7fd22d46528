from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from offboard_tenancy.api.error import ClientError, ServerError
from offboard_tenancy.app.services.email_dispatcher import IEmailDispatcher
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.app.use_cases.invitations import (
    CancelInvitationResponse,
    CancelInvitationUseCase,
    InvitationDetailsResponse,
    InvitationRedeemedResponse,
    RedeemInvitationUseCase,
    ResendInvitationResponse,
    ResendInvitationUseCase,
    ValidateInvitationUseCase,
)
from offboard_tenancy.depends import (
    Identity,
    RequestContext,
    get_app_url,
    get_current_organization_id,
    get_email_dispatcher,
    get_identity,
    get_request_context,
    get_unit_of_work,
)

router = APIRouter(prefix="/invitations", tags=["Invitations"])


class AcceptInvitationRequest(BaseModel):
    """
    Accept invitation HTTP request payload

    The accepting identity comes from the bearer token.
    """

    token: str = Field(..., min_length=1, description="Invitation token")


def _raise_for_lookup_error(error):
    if error.code == "INVITATION_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    elif error.code == "INVITATION_EXPIRED":
        raise ClientError(error, status_code=status.HTTP_410_GONE)
    elif error.code == "INVITATION_ALREADY_USED":
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)


@router.get(
    "/validate",
    status_code=status.HTTP_200_OK,
    response_model=InvitationDetailsResponse,
)
async def validate_invitation(
    token: str = Query(..., min_length=1),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Validate Invitation

    Public: shows what the invitation is for before the invitee signs in.

    Raises:
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_ALREADY_USED
        - 410 Gone: INVITATION_EXPIRED
    """
    use_case = ValidateInvitationUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        error = result.error
        _raise_for_lookup_error(error)
        if error.code == "ORGANIZATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/accept",
    status_code=status.HTTP_200_OK,
    response_model=InvitationRedeemedResponse,
)
async def accept_invitation(
    request: AcceptInvitationRequest,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Accept Invitation

    Works for existing users and for identities signing in for the first
    time. The signed-in email must be the invited one.

    Raises:
        - 401 Unauthorized: Invalid or expired identity token
        - 403 Forbidden: WRONG_ACCOUNT (with remediation)
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_ALREADY_USED, ALREADY_MEMBER,
                        ALREADY_REGISTERED
        - 410 Gone: INVITATION_EXPIRED
    """
    use_case = RedeemInvitationUseCase(uow)
    result = await use_case.execute(
        request.token,
        identity.user_id,
        identity.email,
        email_verified=identity.email_verified,
        name=identity.name,
    )

    if result.is_err():
        error = result.error
        _raise_for_lookup_error(error)
        if error.code == "WRONG_ACCOUNT":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code in ("ALREADY_MEMBER", "ALREADY_REGISTERED"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "ORGANIZATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/{invitation_id}/resend",
    status_code=status.HTTP_200_OK,
    response_model=ResendInvitationResponse,
)
async def resend_invitation(
    invitation_id: UUID,
    context: RequestContext = Depends(get_request_context),
    organization_id: UUID = Depends(get_current_organization_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_dispatcher: IEmailDispatcher = Depends(get_email_dispatcher),
    app_url: str = Depends(get_app_url),
):
    """
    Resend Invitation

    Resends a pending invitation with expiry 7 days from now.

    Raises:
        - 403 Forbidden: PERMISSION_DENIED
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_ALREADY_USED
        - 410 Gone: INVITATION_EXPIRED
    """
    use_case = ResendInvitationUseCase(uow, email_dispatcher, app_url)
    result = await use_case.execute(context.user_id, organization_id, invitation_id)

    if result.is_err():
        error = result.error
        if error.code == "PERMISSION_DENIED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        _raise_for_lookup_error(error)
        raise ServerError(error)

    return result.value


@router.delete(
    "/{invitation_id}",
    status_code=status.HTTP_200_OK,
    response_model=CancelInvitationResponse,
)
async def cancel_invitation(
    invitation_id: UUID,
    context: RequestContext = Depends(get_request_context),
    organization_id: UUID = Depends(get_current_organization_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Cancel Invitation

    Admins, or the member who sent it, can cancel a pending invitation.

    Raises:
        - 403 Forbidden: NOT_A_MEMBER, PERMISSION_DENIED
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_ALREADY_USED
    """
    use_case = CancelInvitationUseCase(uow)
    result = await use_case.execute(context.user_id, organization_id, invitation_id)

    if result.is_err():
        error = result.error
        if error.code in ("NOT_A_MEMBER", "PERMISSION_DENIED"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        _raise_for_lookup_error(error)
        raise ServerError(error)

    return result.value

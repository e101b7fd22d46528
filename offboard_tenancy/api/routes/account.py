from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from offboard_tenancy.api.error import ClientError, ServerError
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.app.use_cases.organizations import (
    ContextResponse,
    LoadContextUseCase,
    SignupCommand,
    SignupResponse,
    SignupUseCase,
)
from offboard_tenancy.depends import Identity, get_identity, get_unit_of_work

router = APIRouter(tags=["Account"])


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    The identity (id, email, verification) comes from the bearer token.
    """

    organization_name: str = Field(..., min_length=1, max_length=255)
    name: str = Field("", max_length=255)


@router.post(
    "/auth/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=SignupResponse,
)
async def signup(
    request: SignupRequest,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Signup

    Re-checks trial eligibility, then creates the user, their first
    organization with an admin membership, and starts a 14-day
    Professional trial in one transaction.

    Raises:
        - 400 Bad Request: TRIAL_NOT_ELIGIBLE
        - 401 Unauthorized: Invalid or expired identity token
        - 409 Conflict: ALREADY_REGISTERED, TRIAL_ALREADY_USED
        - 500 Internal Server Error: Server error
    """
    command = SignupCommand(
        user_id=identity.user_id,
        email=identity.email,
        email_verified=identity.email_verified,
        name=request.name or identity.name or "",
        organization_name=request.organization_name,
    )

    use_case = SignupUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "TRIAL_NOT_ELIGIBLE":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("ALREADY_REGISTERED", "TRIAL_ALREADY_USED", "ALREADY_MEMBER"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=ContextResponse)
async def get_me(
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current user context

    User, current organization with role and capabilities, entitlements
    and every organization the user can switch to.

    Raises:
        - 401 Unauthorized: Invalid or expired identity token
        - 404 Not Found: USER_NOT_FOUND (signup not completed)
    """
    use_case = LoadContextUseCase(uow)
    result = await use_case.execute(identity.user_id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from offboard_tenancy.api.error import ServerError
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.app.use_cases.trials import (
    CheckTrialEligibilityUseCase,
    TrialEligibilityResponse,
)
from offboard_tenancy.depends import get_unit_of_work

router = APIRouter(prefix="/trials", tags=["Trials"])


class TrialEligibilityRequest(BaseModel):
    """
    Trial eligibility HTTP request payload

    Plain string rather than EmailStr: a malformed address is an
    ineligible answer, not a validation error.
    """

    email: str = Field(..., min_length=1, max_length=255)


@router.post(
    "/eligibility",
    status_code=status.HTTP_200_OK,
    response_model=TrialEligibilityResponse,
)
async def check_trial_eligibility(
    request: TrialEligibilityRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Check Trial Eligibility

    Pre-signup check; no side effects. Store failures answer ineligible.
    """
    use_case = CheckTrialEligibilityUseCase(uow)
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value

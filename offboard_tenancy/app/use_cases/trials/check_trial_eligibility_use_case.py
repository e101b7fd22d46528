"""
Check Trial Eligibility Use Case

Answers the pre-signup question "may this email start a trial?".
"""

from offboard_tenancy.app.services.trial_eligibility import TrialEligibilityGuard
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.libs.result import Result, Return

from .dtos import TrialEligibilityResponse


class CheckTrialEligibilityUseCase:
    """
    Business Rules:
    - Read-only; the answer is re-checked at signup
    - Always succeeds: ineligibility is an answer, not an error
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str) -> Result[TrialEligibilityResponse]:
        async with self.uow:
            eligibility = await TrialEligibilityGuard(self.uow).check_eligibility(email)

        return Return.ok(
            TrialEligibilityResponse(
                eligible=eligibility.eligible, reason=eligibility.reason
            )
        )

"""
Trial Use Cases
"""

from .check_trial_eligibility_use_case import CheckTrialEligibilityUseCase
from .dtos import EndExpiredTrialsResponse, TrialEligibilityResponse
from .end_expired_trials_use_case import EndExpiredTrialsUseCase

__all__ = [
    "CheckTrialEligibilityUseCase",
    "EndExpiredTrialsUseCase",
    "TrialEligibilityResponse",
    "EndExpiredTrialsResponse",
]

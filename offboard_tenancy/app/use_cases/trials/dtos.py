"""
Trial Use Case DTOs
"""

from typing import List, Optional

from pydantic import BaseModel


class TrialEligibilityResponse(BaseModel):
    """Response for check trial eligibility use case"""

    eligible: bool
    reason: Optional[str] = None


class EndExpiredTrialsResponse(BaseModel):
    """Response for end expired trials use case"""

    downgraded: int
    emails_sent: int
    user_emails: List[str]

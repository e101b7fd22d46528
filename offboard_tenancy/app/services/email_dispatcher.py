from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

INVITATION_EMAIL = "invitation"
TRIAL_ENDED_EMAIL = "trial_ended"


class EmailDispatchResult(BaseModel):
    """Outcome reported by the email collaborator"""

    success: bool
    message_id: Optional[str] = None


class IEmailDispatcher(ABC):
    """
    Email dispatch collaborator - application layer

    Implementations must not raise for delivery problems; they report
    them through EmailDispatchResult so callers can treat sending as
    fire-and-forget relative to their own transaction.
    """

    @abstractmethod
    async def send(
        self, email_type: str, recipients: List[str], template_data: Dict[str, Any]
    ) -> EmailDispatchResult:
        pass

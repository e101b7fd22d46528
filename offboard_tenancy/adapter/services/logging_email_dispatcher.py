import logging
from typing import Any, Dict, List

from offboard_tenancy.app.services.email_dispatcher import (
    EmailDispatchResult,
    IEmailDispatcher,
)

logger = logging.getLogger(__name__)


class LoggingEmailDispatcher(IEmailDispatcher):
    """Used when no mail service is configured: logs and reports failure."""

    async def send(
        self, email_type: str, recipients: List[str], template_data: Dict[str, Any]
    ) -> EmailDispatchResult:
        logger.info(
            "No email service configured; %s email to %s not sent",
            email_type,
            ", ".join(recipients),
        )
        return EmailDispatchResult(success=False)

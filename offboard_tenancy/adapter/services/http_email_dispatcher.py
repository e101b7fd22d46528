"""
Email dispatch over HTTP.

Posts `{"type", "to", "data"}` to the mail service and reports the
outcome instead of raising.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from offboard_tenancy.app.services.email_dispatcher import (
    EmailDispatchResult,
    IEmailDispatcher,
)

logger = logging.getLogger(__name__)


class HttpEmailDispatcher(IEmailDispatcher):
    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.api_key = api_key
        self.transport = transport

    async def send(
        self, email_type: str, recipients: List[str], template_data: Dict[str, Any]
    ) -> EmailDispatchResult:
        headers = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        payload = {"type": email_type, "to": recipients, "data": template_data}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post(self.url, json=payload, headers=headers)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.error(
                    "Email service rejected %s email (%d): %s",
                    email_type,
                    e.response.status_code,
                    e.response.text,
                )
                return EmailDispatchResult(success=False)
            except httpx.HTTPError as e:
                logger.error("Email service unreachable for %s email: %s", email_type, e)
                return EmailDispatchResult(success=False)

        message_id = None
        if "application/json" in response.headers.get("content-type", "").lower():
            try:
                body = response.json()
            except ValueError:
                logger.warning(
                    "Email service accepted %s email with an unreadable body", email_type
                )
                body = None
            if isinstance(body, dict):
                message_id = body.get("messageId") or body.get("message_id")

        return EmailDispatchResult(success=True, message_id=message_id)

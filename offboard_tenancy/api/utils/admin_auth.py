"""
Admin API Key Authentication

Validates admin API keys for scheduler and billing endpoints.
"""

import secrets

from fastapi import Header, status

from config import ApplicationConfig
from offboard_tenancy.api.error import ClientError
from offboard_tenancy.libs.result import Error


async def verify_admin_api_key(x_admin_api_key: str = Header(None)):
    """
    Verify admin API key from X-Admin-API-Key header.

    Used by the trial expiry scheduler and the billing webhook relay.
    Service-to-service auth, separate from identity tokens.

    Raises:
        ClientError: 401 if key is missing or invalid
    """
    if not x_admin_api_key:
        raise ClientError(
            Error("UNAUTHORIZED", "Admin API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if not secrets.compare_digest(x_admin_api_key, ApplicationConfig.ADMIN_API_KEY):
        raise ClientError(
            Error("INVALID_API_KEY", "Invalid admin API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True

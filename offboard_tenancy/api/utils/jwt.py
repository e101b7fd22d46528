from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def create_identity_token(
    user_id: UUID,
    email: str,
    email_verified: bool = False,
    name: Optional[str] = None,
    expires_delta: timedelta = timedelta(hours=1),
) -> str:
    """
    Create an identity token the way the identity provider signs them

    Used by local tooling and tests; production tokens come from the
    identity provider with the same claims.

    Returns:
        JWT token string (HS256 by default)
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": str(user_id),
        "email": email,
        "email_verified": email_verified,
        "exp": now + expires_delta,
        "iat": now,
    }
    if name:
        payload["name"] = name
    return jwt.encode(
        payload,
        ApplicationConfig.IDENTITY_JWT_SECRET,
        algorithm=ApplicationConfig.IDENTITY_JWT_ALGORITHM,
    )


def verify_identity_token(token: str) -> Optional[dict]:
    """
    Verify and decode an identity token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict, or None if the signature, expiry or the
        user_id/email claims are invalid
    """
    try:
        payload = jwt.decode(
            token,
            ApplicationConfig.IDENTITY_JWT_SECRET,
            algorithms=[ApplicationConfig.IDENTITY_JWT_ALGORITHM],
        )
    except JWTError:
        return None

    user_id = payload.get("user_id") or payload.get("sub")
    if not user_id or not payload.get("email"):
        return None
    try:
        payload["user_id"] = str(UUID(str(user_id)))
    except ValueError:
        return None
    return payload

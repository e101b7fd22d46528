from uuid import uuid4

from offboard_tenancy.api.utils.jwt import create_identity_token


def identity_headers(email, user_id=None, name=None):
    """Bearer headers for an identity provider account; returns (user_id, headers)"""
    user_id = user_id or uuid4()
    token = create_identity_token(user_id, email, email_verified=True, name=name)
    return user_id, {"Authorization": f"Bearer {token}"}

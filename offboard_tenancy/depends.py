from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from offboard_tenancy.adapter.services.http_email_dispatcher import HttpEmailDispatcher
from offboard_tenancy.adapter.services.logging_email_dispatcher import (
    LoggingEmailDispatcher,
)
from offboard_tenancy.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from offboard_tenancy.api.error import ClientError
from offboard_tenancy.api.utils.jwt import verify_identity_token
from offboard_tenancy.app.services.email_dispatcher import IEmailDispatcher
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.domain.base import normalize_email
from offboard_tenancy.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()


class Identity(BaseModel):
    """Verified claims of the identity provider's token"""

    user_id: UUID
    email: str
    email_verified: bool = False
    name: Optional[str] = None


class RequestContext(BaseModel):
    """
    Per-request tenancy context.

    The current organization always comes from the stored user row, never
    from anything the client sends.
    """

    user_id: UUID
    email: str
    email_verified: bool
    current_organization_id: Optional[UUID] = None


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_email_dispatcher() -> IEmailDispatcher:
    if ApplicationConfig.EMAIL_DISPATCH_URL:
        return HttpEmailDispatcher(
            ApplicationConfig.EMAIL_DISPATCH_URL,
            timeout=ApplicationConfig.EMAIL_DISPATCH_TIMEOUT,
            api_key=ApplicationConfig.EMAIL_DISPATCH_API_KEY or None,
        )
    return LoggingEmailDispatcher()


def get_app_url() -> str:
    return ApplicationConfig.APP_URL


async def get_identity(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Identity:
    """
    Dependency to extract and verify the identity token from the
    Authorization header.

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    payload = verify_identity_token(credentials.credentials)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return Identity(
        user_id=payload["user_id"],
        email=normalize_email(payload["email"]),
        email_verified=bool(payload.get("email_verified", False)),
        name=payload.get("name"),
    )


async def get_request_context(
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> RequestContext:
    """Resolve the signed-in user's row; 404 until signup has created it."""
    async with uow:
        user = await uow.users.get_by_id(identity.user_id)
        if user is None:
            raise ClientError(
                Error(
                    "USER_NOT_FOUND",
                    "No account for this identity",
                    remediation="Complete signup or accept an invitation first.",
                ),
                status_code=status.HTTP_404_NOT_FOUND,
            )
        current_organization_id = user.current_organization_id

    return RequestContext(
        user_id=identity.user_id,
        email=identity.email,
        email_verified=identity.email_verified,
        current_organization_id=current_organization_id,
    )


async def get_current_organization_id(
    context: RequestContext = Depends(get_request_context),
) -> UUID:
    if context.current_organization_id is None:
        raise ClientError(
            Error(
                "NO_CURRENT_ORGANIZATION",
                "You do not have a current organization",
                remediation="Create an organization or accept an invitation.",
            ),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return context.current_organization_id

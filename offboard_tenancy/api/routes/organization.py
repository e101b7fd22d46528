from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from offboard_tenancy.api.error import ClientError, ServerError
from offboard_tenancy.app.services.email_dispatcher import IEmailDispatcher
from offboard_tenancy.app.services.unit_of_work import UnitOfWork
from offboard_tenancy.app.use_cases.invitations import (
    InvitationIssuedResponse,
    IssueInvitationUseCase,
)
from offboard_tenancy.app.use_cases.organizations import (
    CreateOrganizationUseCase,
    ListMembersUseCase,
    ListOrganizationsUseCase,
    MembersResponse,
    OrganizationListResponse,
    OrganizationResponse,
    RemoveMemberResponse,
    RemoveMemberUseCase,
    SwitchOrganizationUseCase,
)
from offboard_tenancy.depends import (
    RequestContext,
    get_app_url,
    get_current_organization_id,
    get_email_dispatcher,
    get_request_context,
    get_unit_of_work,
)

router = APIRouter(prefix="/organizations", tags=["Organizations"])


class CreateOrganizationRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class SwitchOrganizationRequest(BaseModel):
    """
    Switch organization HTTP request payload

    Validates incoming request for switching the current organization.
    """

    organization_id: UUID = Field(..., description="Organization to switch to")


class IssueInvitationRequest(BaseModel):
    """
    Invite user HTTP request payload

    The organization is the inviter's current one.
    """

    email: EmailStr = Field(..., description="Email address to invite")
    role: str = Field("user", description="admin, hr_manager, it_manager, manager or user")


@router.get("", status_code=status.HTTP_200_OK, response_model=OrganizationListResponse)
async def list_organizations(
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Organizations the user holds an active membership in."""
    use_case = ListOrganizationsUseCase(uow)
    result = await use_case.execute(context.user_id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=OrganizationResponse)
async def create_organization(
    request: CreateOrganizationRequest,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Organization

    The caller becomes admin and owner, and the new organization becomes
    current.
    """
    use_case = CreateOrganizationUseCase(uow)
    result = await use_case.execute(context.user_id, request.name)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "ALREADY_MEMBER":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.post("/switch", status_code=status.HTTP_200_OK, response_model=OrganizationResponse)
async def switch_organization(
    request: SwitchOrganizationRequest,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Switch Organization

    Raises:
        - 401 Unauthorized: Invalid or expired identity token
        - 403 Forbidden: NOT_A_MEMBER (no active membership in the target)
        - 404 Not Found: USER_NOT_FOUND, ORGANIZATION_NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    use_case = SwitchOrganizationUseCase(uow)
    result = await use_case.execute(context.user_id, request.organization_id)

    if result.is_err():
        error = result.error
        if error.code == "NOT_A_MEMBER":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code in ("USER_NOT_FOUND", "ORGANIZATION_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get(
    "/current/members", status_code=status.HTTP_200_OK, response_model=MembersResponse
)
async def list_members(
    context: RequestContext = Depends(get_request_context),
    organization_id: UUID = Depends(get_current_organization_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Team page: active members, pending invitations, entitlements."""
    use_case = ListMembersUseCase(uow)
    result = await use_case.execute(context.user_id, organization_id)

    if result.is_err():
        error = result.error
        if error.code == "NOT_A_MEMBER":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "ORGANIZATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.delete(
    "/current/members/{membership_id}",
    status_code=status.HTTP_200_OK,
    response_model=RemoveMemberResponse,
)
async def remove_member(
    membership_id: UUID,
    context: RequestContext = Depends(get_request_context),
    organization_id: UUID = Depends(get_current_organization_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove Member

    Deactivates a membership of the current organization.

    Raises:
        - 403 Forbidden: NOT_A_MEMBER, PERMISSION_DENIED
        - 404 Not Found: MEMBERSHIP_NOT_FOUND
        - 409 Conflict: LAST_ADMIN
    """
    use_case = RemoveMemberUseCase(uow)
    result = await use_case.execute(context.user_id, organization_id, membership_id)

    if result.is_err():
        error = result.error
        if error.code in ("NOT_A_MEMBER", "PERMISSION_DENIED"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "MEMBERSHIP_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "LAST_ADMIN":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.post(
    "/current/invitations",
    status_code=status.HTTP_201_CREATED,
    response_model=InvitationIssuedResponse,
)
async def issue_invitation(
    request: IssueInvitationRequest,
    context: RequestContext = Depends(get_request_context),
    organization_id: UUID = Depends(get_current_organization_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_dispatcher: IEmailDispatcher = Depends(get_email_dispatcher),
    app_url: str = Depends(get_app_url),
):
    """
    Invite User to the current organization

    Raises:
        - 400 Bad Request: INVALID_ROLE, NO_CURRENT_ORGANIZATION
        - 402 Payment Required: LIMIT_REACHED (with remediation)
        - 403 Forbidden: PERMISSION_DENIED
        - 404 Not Found: ORGANIZATION_NOT_FOUND
        - 409 Conflict: ALREADY_MEMBER, INVITE_ALREADY_EXISTS
        - 500 Internal Server Error: Server error
    """
    use_case = IssueInvitationUseCase(uow, email_dispatcher, app_url)
    result = await use_case.execute(
        organization_id, context.user_id, request.email, request.role
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_ROLE":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "LIMIT_REACHED":
            raise ClientError(error, status_code=status.HTTP_402_PAYMENT_REQUIRED)
        elif error.code == "PERMISSION_DENIED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "ORGANIZATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("ALREADY_MEMBER", "INVITE_ALREADY_EXISTS"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value

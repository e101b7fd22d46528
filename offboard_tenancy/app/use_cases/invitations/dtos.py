"""
Invitation Use Case DTOs (Data Transfer Objects)

Response classes for the invitation lifecycle.
"""

from typing import Optional

from pydantic import BaseModel


class InvitationIssuedResponse(BaseModel):
    """Response for issue invitation use case"""

    invitation_id: str
    email: str
    role: str
    status: str
    expires_at: str
    token: str
    invite_link: str
    email_sent: bool


class InvitationDetailsResponse(BaseModel):
    """What an invitee sees before authenticating"""

    email: str
    role: str
    organization_id: str
    organization_name: str
    expires_at: str


class OrganizationInfo(BaseModel):
    """Organization joined through an invitation"""

    id: str
    name: str
    role: str


class InvitationRedeemedResponse(BaseModel):
    """Response for redeem invitation use case"""

    status: str
    organization: OrganizationInfo
    membership_id: str
    is_current_organization: bool


class CancelInvitationResponse(BaseModel):
    """Response for cancel invitation use case"""

    status: str


class ResendInvitationResponse(BaseModel):
    """Response for resend invitation use case"""

    status: str
    expires_at: str
    email_sent: bool
    invite_link: Optional[str] = None

"""
Invitation Use Cases

Issue, validate, redeem, cancel and resend organization invitations.
"""

from .cancel_invitation_use_case import CancelInvitationUseCase
from .dtos import (
    CancelInvitationResponse,
    InvitationDetailsResponse,
    InvitationIssuedResponse,
    InvitationRedeemedResponse,
    OrganizationInfo,
    ResendInvitationResponse,
)
from .issue_invitation_use_case import IssueInvitationUseCase
from .redeem_invitation_use_case import RedeemInvitationUseCase
from .resend_invitation_use_case import ResendInvitationUseCase
from .validate_invitation_use_case import ValidateInvitationUseCase

__all__ = [
    "IssueInvitationUseCase",
    "ValidateInvitationUseCase",
    "RedeemInvitationUseCase",
    "CancelInvitationUseCase",
    "ResendInvitationUseCase",
    "InvitationIssuedResponse",
    "InvitationDetailsResponse",
    "InvitationRedeemedResponse",
    "CancelInvitationResponse",
    "ResendInvitationResponse",
    "OrganizationInfo",
]

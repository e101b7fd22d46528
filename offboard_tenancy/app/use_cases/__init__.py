"""
Use Cases

Organized into domain folders:
- invitations/: Invitation lifecycle
- organizations/: Signup, context, switching and team management
- trials/: Trial eligibility and expiry
- billing/: Subscription sync
"""

from .billing import SyncSubscriptionUseCase
from .invitations import (
    CancelInvitationUseCase,
    IssueInvitationUseCase,
    RedeemInvitationUseCase,
    ResendInvitationUseCase,
    ValidateInvitationUseCase,
)
from .organizations import (
    CreateOrganizationUseCase,
    ListMembersUseCase,
    ListOrganizationsUseCase,
    LoadContextUseCase,
    RemoveMemberUseCase,
    SignupCommand,
    SignupUseCase,
    SwitchOrganizationUseCase,
)
from .trials import CheckTrialEligibilityUseCase, EndExpiredTrialsUseCase

__all__ = [
    # Invitations
    "IssueInvitationUseCase",
    "ValidateInvitationUseCase",
    "RedeemInvitationUseCase",
    "CancelInvitationUseCase",
    "ResendInvitationUseCase",
    # Organizations
    "SignupUseCase",
    "SignupCommand",
    "CreateOrganizationUseCase",
    "SwitchOrganizationUseCase",
    "LoadContextUseCase",
    "ListOrganizationsUseCase",
    "ListMembersUseCase",
    "RemoveMemberUseCase",
    # Trials
    "CheckTrialEligibilityUseCase",
    "EndExpiredTrialsUseCase",
    # Billing
    "SyncSubscriptionUseCase",
]

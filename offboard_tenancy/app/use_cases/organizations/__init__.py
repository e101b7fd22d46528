"""
Organization Use Cases

Signup, organization context, switching and team management.
"""

from .create_organization_use_case import CreateOrganizationUseCase
from .dtos import (
    ContextResponse,
    EntitlementsInfo,
    MemberInfo,
    MembersResponse,
    OrganizationListResponse,
    OrganizationResponse,
    OrganizationSummary,
    PendingInvitationInfo,
    RemoveMemberResponse,
    SignupCommand,
    SignupResponse,
    SubscriptionInfo,
    UserInfo,
)
from .list_members_use_case import ListMembersUseCase
from .list_organizations_use_case import ListOrganizationsUseCase
from .load_context_use_case import LoadContextUseCase
from .remove_member_use_case import RemoveMemberUseCase
from .signup_use_case import SignupUseCase
from .switch_organization_use_case import SwitchOrganizationUseCase

__all__ = [
    "SignupUseCase",
    "CreateOrganizationUseCase",
    "SwitchOrganizationUseCase",
    "LoadContextUseCase",
    "ListOrganizationsUseCase",
    "ListMembersUseCase",
    "RemoveMemberUseCase",
    "SignupCommand",
    "SignupResponse",
    "ContextResponse",
    "EntitlementsInfo",
    "MemberInfo",
    "MembersResponse",
    "OrganizationListResponse",
    "OrganizationResponse",
    "OrganizationSummary",
    "PendingInvitationInfo",
    "RemoveMemberResponse",
    "SubscriptionInfo",
    "UserInfo",
]

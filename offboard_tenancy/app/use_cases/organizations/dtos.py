"""
Organization Use Case DTOs (Data Transfer Objects)

Command and Response classes for signup, organization context, switching
and the team page.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from offboard_tenancy.domain.entitlements import (
    GATED_FEATURES,
    EntitlementSnapshot,
    get_feature_display_name,
    get_upgrade_message,
    minimum_plan_for,
)


# ============================================================================
# Commands
# ============================================================================


class SignupCommand(BaseModel):
    """
    Signup command - a verified identity asking for an account

    user_id, email and email_verified come from the identity token, never
    from the request body.
    """

    user_id: UUID
    email: str
    email_verified: bool = False
    name: str = ""
    organization_name: str


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """User information in responses"""

    id: str
    email: str
    name: str
    email_verified: bool


class OrganizationSummary(BaseModel):
    """One organization the user belongs to"""

    id: str
    name: str
    role: str
    is_current: bool = False


class SubscriptionInfo(BaseModel):
    """Billing fields of the organization owner"""

    subscription_plan: Optional[str] = None
    subscription_status: Optional[str] = None
    trial_ends_at: Optional[str] = None


class LockedFeature(BaseModel):
    """A gated feature the organization cannot use yet, with upgrade copy"""

    feature: str
    display_name: str
    required_plan: str
    upgrade_message: str


class EntitlementsInfo(BaseModel):
    """Entitlement snapshot as returned to clients"""

    effective_plan: str
    plan_name: str
    subscription_plan: Optional[str] = None
    subscription_status: Optional[str] = None
    max_team_members: Optional[int] = None
    max_offboardings_per_month: Optional[int] = None
    max_templates: Optional[int] = None
    features: List[str]
    locked_features: List[LockedFeature] = []
    active_member_count: int
    remaining_member_slots: Optional[int] = None
    can_invite_more_members: bool

    @classmethod
    def from_snapshot(cls, snapshot: EntitlementSnapshot) -> "EntitlementsInfo":
        limits = snapshot.limits
        return cls(
            effective_plan=snapshot.effective_plan.value,
            plan_name=limits.name,
            subscription_plan=snapshot.subscription_plan,
            subscription_status=snapshot.subscription_status,
            max_team_members=limits.max_team_members,
            max_offboardings_per_month=limits.max_offboardings_per_month,
            max_templates=limits.max_templates,
            features=sorted(
                f for f in limits.features if snapshot.has_feature_access(f)
            ),
            locked_features=[
                LockedFeature(
                    feature=f,
                    display_name=get_feature_display_name(f),
                    required_plan=minimum_plan_for(f).value,
                    upgrade_message=get_upgrade_message(f),
                )
                for f in sorted(GATED_FEATURES)
                if not snapshot.has_feature_access(f)
            ],
            active_member_count=snapshot.active_member_count,
            remaining_member_slots=snapshot.remaining_member_slots(),
            can_invite_more_members=snapshot.can_invite_more_members(),
        )


class SignupResponse(BaseModel):
    """Response for signup use case"""

    user: UserInfo
    organization: OrganizationSummary
    subscription: SubscriptionInfo


class ContextResponse(BaseModel):
    """Response for load context use case (GET /me)"""

    user: UserInfo
    current_organization: Optional[OrganizationSummary] = None
    role: Optional[str] = None
    capabilities: List[str]
    subscription: Optional[SubscriptionInfo] = None
    entitlements: Optional[EntitlementsInfo] = None
    organizations: List[OrganizationSummary]


class OrganizationListResponse(BaseModel):
    """Response for list organizations use case"""

    organizations: List[OrganizationSummary]
    current_organization_id: Optional[str] = None


class OrganizationResponse(BaseModel):
    """Response for create and switch organization use cases"""

    organization: OrganizationSummary


class MemberInfo(BaseModel):
    """Active member on the team page"""

    membership_id: str
    user_id: str
    email: str
    name: str
    role: str
    joined_at: str


class PendingInvitationInfo(BaseModel):
    """Pending invitation on the team page"""

    invitation_id: str
    email: str
    role: str
    invited_by: str
    created_at: str
    expires_at: str


class MembersResponse(BaseModel):
    """Response for list members use case"""

    members: List[MemberInfo]
    pending_invitations: List[PendingInvitationInfo]
    entitlements: EntitlementsInfo


class RemoveMemberResponse(BaseModel):
    """Response for remove member use case"""

    status: str
    membership_id: str

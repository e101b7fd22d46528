"""
Entitlement Catalog & Evaluator

Static plan -> limits/features mapping and the pure decision functions
built on it. Nothing here touches the store: the same inputs always give
the same decision.

Subscription status, not the stored plan name, is authoritative: a
canceled or past-due organization keeps its plan string but loses every
gated feature and falls back to free-tier limits.
"""

from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict

from .entities.enums import SubscriptionPlan, SubscriptionStatus

TRIAL_PLAN = SubscriptionPlan.professional

ENTITLED_STATUSES = frozenset({SubscriptionStatus.active, SubscriptionStatus.trialing})

# Gated feature names; anything else is not gated by plan
AI_INSIGHTS = "ai_insights"
SECURITY_SCANNER = "security_scanner"
EXIT_SURVEYS = "exit_surveys"
API_ACCESS = "api"
PRIORITY_SUPPORT = "priority_support"
CUSTOM_BRANDING = "custom_branding"

GATED_FEATURES = frozenset(
    {
        AI_INSIGHTS,
        SECURITY_SCANNER,
        EXIT_SURVEYS,
        API_ACCESS,
        PRIORITY_SUPPORT,
        CUSTOM_BRANDING,
    }
)

FEATURE_ALIASES = {
    "ai": AI_INSIGHTS,
    "security": SECURITY_SCANNER,
    "surveys": EXIT_SURVEYS,
}

FEATURE_DISPLAY_NAMES = {
    AI_INSIGHTS: "AI Insights",
    SECURITY_SCANNER: "Security Scanner",
    EXIT_SURVEYS: "Exit Surveys",
    API_ACCESS: "API Access",
    PRIORITY_SUPPORT: "Priority Support",
    CUSTOM_BRANDING: "Custom Branding",
}


class PlanLimits(BaseModel):
    """Limits of one plan tier. None means unlimited."""

    model_config = ConfigDict(frozen=True)

    plan: SubscriptionPlan
    name: str
    max_team_members: Optional[int]
    max_offboardings_per_month: Optional[int]
    max_templates: Optional[int]
    features: FrozenSet[str]


PROFESSIONAL_FEATURES = frozenset(
    {AI_INSIGHTS, SECURITY_SCANNER, EXIT_SURVEYS, PRIORITY_SUPPORT}
)

PLAN_LIMITS = {
    SubscriptionPlan.free: PlanLimits(
        plan=SubscriptionPlan.free,
        name="Free",
        max_team_members=5,
        max_offboardings_per_month=3,
        max_templates=2,
        features=frozenset(),
    ),
    SubscriptionPlan.starter: PlanLimits(
        plan=SubscriptionPlan.starter,
        name="Starter",
        max_team_members=25,
        max_offboardings_per_month=10,
        max_templates=5,
        features=frozenset(),
    ),
    SubscriptionPlan.professional: PlanLimits(
        plan=SubscriptionPlan.professional,
        name="Professional",
        max_team_members=100,
        max_offboardings_per_month=50,
        max_templates=20,
        features=PROFESSIONAL_FEATURES,
    ),
    SubscriptionPlan.enterprise: PlanLimits(
        plan=SubscriptionPlan.enterprise,
        name="Enterprise",
        max_team_members=None,
        max_offboardings_per_month=None,
        max_templates=None,
        features=PROFESSIONAL_FEATURES | {API_ACCESS, CUSTOM_BRANDING},
    ),
}


def normalize_plan(plan: Optional[str]) -> SubscriptionPlan:
    """Map a stored plan string to a tier; unknown or missing means free."""
    if not plan:
        return SubscriptionPlan.free
    try:
        return SubscriptionPlan(plan.strip().lower())
    except ValueError:
        return SubscriptionPlan.free


def normalize_feature(feature: str) -> str:
    name = feature.strip().lower()
    return FEATURE_ALIASES.get(name, name)


def is_entitled_status(subscription_status: Optional[str]) -> bool:
    return subscription_status in {s.value for s in ENTITLED_STATUSES}


def resolve_effective_plan(
    plan: Optional[str], subscription_status: Optional[str]
) -> SubscriptionPlan:
    """
    Plan whose limits apply right now.

    - trialing: the trial plan, whatever is stored
    - active: the stored plan
    - anything else (canceled, past_due, trial_ended, none): free
    """
    if subscription_status == SubscriptionStatus.trialing.value:
        return TRIAL_PLAN
    if subscription_status == SubscriptionStatus.active.value:
        return normalize_plan(plan)
    return SubscriptionPlan.free


def get_plan_limits(plan: Optional[str]) -> PlanLimits:
    return PLAN_LIMITS[normalize_plan(plan)]


def can_invite_more_members(current_count: int, plan: Optional[str]) -> bool:
    limit = get_plan_limits(plan).max_team_members
    if limit is None:
        return True
    return current_count < limit


def remaining_member_slots(current_count: int, plan: Optional[str]) -> Optional[int]:
    limit = get_plan_limits(plan).max_team_members
    if limit is None:
        return None
    return max(0, limit - current_count)


def has_feature_access(
    feature: str, plan: Optional[str], subscription_status: Optional[str]
) -> bool:
    """
    Whether a feature is usable for the given plan and billing status.

    Gated features require an entitled status (active or trialing) and a
    plan that lists them. Feature names outside the gated set are not
    restricted by plan.
    """
    name = normalize_feature(feature)
    if name not in GATED_FEATURES:
        return True
    if not is_entitled_status(subscription_status):
        return False
    effective = resolve_effective_plan(plan, subscription_status)
    return name in PLAN_LIMITS[effective].features


def minimum_plan_for(feature: str) -> Optional[SubscriptionPlan]:
    """Cheapest tier that unlocks a gated feature."""
    name = normalize_feature(feature)
    for tier in SubscriptionPlan:
        if name in PLAN_LIMITS[tier].features:
            return tier
    return None


def get_feature_display_name(feature: str) -> str:
    name = normalize_feature(feature)
    return FEATURE_DISPLAY_NAMES.get(name, feature)


def get_upgrade_message(feature: str) -> str:
    tier = minimum_plan_for(feature) or SubscriptionPlan.professional
    return (
        f"{get_feature_display_name(feature)} is available on the "
        f"{PLAN_LIMITS[tier].name} plan"
    )


def member_limit_remediation(plan: Optional[str]) -> str:
    limits = get_plan_limits(plan)
    return (
        f"Your {limits.name} plan allows {limits.max_team_members} team members. "
        "Upgrade your plan or deactivate a member to invite more people."
    )


class EntitlementSnapshot(BaseModel):
    """
    Entitlements of one organization at decision time.

    Built from the owner's (plan, status) and the live active member
    count; never persisted.
    """

    model_config = ConfigDict(frozen=True)

    subscription_plan: Optional[str]
    subscription_status: Optional[str]
    effective_plan: SubscriptionPlan
    limits: PlanLimits
    active_member_count: int

    @classmethod
    def build(
        cls,
        subscription_plan: Optional[str],
        subscription_status: Optional[str],
        active_member_count: int,
    ) -> "EntitlementSnapshot":
        effective = resolve_effective_plan(subscription_plan, subscription_status)
        return cls(
            subscription_plan=subscription_plan,
            subscription_status=subscription_status,
            effective_plan=effective,
            limits=PLAN_LIMITS[effective],
            active_member_count=active_member_count,
        )

    def can_invite_more_members(self) -> bool:
        return can_invite_more_members(self.active_member_count, self.effective_plan.value)

    def remaining_member_slots(self) -> Optional[int]:
        return remaining_member_slots(self.active_member_count, self.effective_plan.value)

    def has_feature_access(self, feature: str) -> bool:
        return has_feature_access(
            feature, self.subscription_plan, self.subscription_status
        )

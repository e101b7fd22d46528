"""
Domain Entities

Each entity in its own file.
"""

from .enums import (
    InvitationStatus,
    MemberRole,
    SubscriptionPlan,
    SubscriptionStatus,
)

from .user import User
from .organization import Organization
from .membership import Membership
from .invitation import Invitation
from .trial_usage import TrialUsageRecord
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "InvitationStatus",
    "MemberRole",
    "SubscriptionPlan",
    "SubscriptionStatus",
    # Entities
    "User",
    "Organization",
    "Membership",
    "Invitation",
    "TrialUsageRecord",
    "AuditEvent",
]

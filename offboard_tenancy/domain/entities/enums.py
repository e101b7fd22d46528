"""
Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class MemberRole(str, Enum):
    """Role of a user within an organization"""

    admin = "admin"
    hr_manager = "hr_manager"
    it_manager = "it_manager"
    manager = "manager"
    user = "user"


class InvitationStatus(str, Enum):
    """Invitation status - only ever leaves pending, never returns to it"""

    pending = "pending"
    accepted = "accepted"
    cancelled = "cancelled"
    expired = "expired"


class SubscriptionPlan(str, Enum):
    """Plan tier stored on the organization owner's user record"""

    free = "free"
    starter = "starter"
    professional = "professional"
    enterprise = "enterprise"


class SubscriptionStatus(str, Enum):
    """Billing status reported by the billing provider"""

    active = "active"
    trialing = "trialing"
    past_due = "past_due"
    canceled = "canceled"
    trial_ended = "trial_ended"

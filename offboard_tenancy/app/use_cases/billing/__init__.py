"""
Billing Use Cases
"""

from .sync_subscription_use_case import (
    SubscriptionSyncedResponse,
    SyncSubscriptionUseCase,
)

__all__ = ["SyncSubscriptionUseCase", "SubscriptionSyncedResponse"]

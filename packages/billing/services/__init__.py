"""Billing services."""

from packages.billing.services.subscription_sync_service import SubscriptionSyncService
from packages.billing.services.order_service import OrderService

__all__ = [
    "SubscriptionSyncService",
    "OrderService",
]

"""Billing repositories."""

from packages.billing.repositories.subscription_repository import SubscriptionRepository
from packages.billing.repositories.order_repository import OrderRepository

__all__ = [
    "SubscriptionRepository",
    "OrderRepository",
]

"""Database models for billing."""

from packages.billing.models.database.subscription import CustomerSubscriptionEntity
from packages.billing.models.database.order import StripeOrderEntity

__all__ = [
    "CustomerSubscriptionEntity",
    "StripeOrderEntity",
]

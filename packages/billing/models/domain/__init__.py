"""Domain models for billing."""

from packages.billing.models.domain.enums import (
    SubscriptionStatus,
    OrderStatus,
    CheckoutMode,
    CheckoutPaymentStatus,
)
from packages.billing.models.domain.subscription import (
    Subscription,
    SubscriptionSnapshot,
    SubscriptionUpsertModel,
)
from packages.billing.models.domain.order import Order, OrderCreateModel
from packages.billing.models.domain.actions import (
    IgnoreAction,
    SyncSubscriptionAction,
    RecordOrderAction,
    WebhookAction,
)

__all__ = [
    # Enums
    "SubscriptionStatus",
    "OrderStatus",
    "CheckoutMode",
    "CheckoutPaymentStatus",
    # Subscription
    "Subscription",
    "SubscriptionSnapshot",
    "SubscriptionUpsertModel",
    # Order
    "Order",
    "OrderCreateModel",
    # Actions
    "IgnoreAction",
    "SyncSubscriptionAction",
    "RecordOrderAction",
    "WebhookAction",
]

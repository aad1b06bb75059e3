"""
Domain models for customer subscriptions.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from packages.billing.models.domain.enums import SubscriptionStatus


class Subscription(BaseModel):
    """
    Customer subscription domain model.

    A replacement snapshot of what Stripe reported at the last sync:
    - Stripe subscription and price IDs
    - Status, mirrored from Stripe
    - Card display fields of the default payment method
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_id: str

    subscription_id: Optional[str] = None
    price_id: Optional[str] = None
    status: SubscriptionStatus
    cancel_at_period_end: bool = False

    payment_method_brand: Optional[str] = None
    payment_method_last4: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def has_access(self) -> bool:
        """Check if subscription unlocks premium content."""
        return self.status.has_access()


class SubscriptionSnapshot(BaseModel):
    """Current subscription state as fetched from the payment provider."""

    subscription_id: str
    price_id: Optional[str] = None
    status: SubscriptionStatus
    cancel_at_period_end: bool = False
    payment_method_brand: Optional[str] = None
    payment_method_last4: Optional[str] = None


class SubscriptionUpsertModel(BaseModel):
    """Full row written on every sync. Unset fields are stored as NULL."""

    customer_id: str
    subscription_id: Optional[str] = None
    price_id: Optional[str] = None
    status: SubscriptionStatus
    cancel_at_period_end: bool = False
    payment_method_brand: Optional[str] = None
    payment_method_last4: Optional[str] = None

    @classmethod
    def not_started(cls, customer_id: str) -> "SubscriptionUpsertModel":
        """Customer known to Stripe but never subscribed."""
        return cls(customer_id=customer_id, status=SubscriptionStatus.NOT_STARTED)

    @classmethod
    def from_snapshot(
        cls, customer_id: str, snapshot: SubscriptionSnapshot
    ) -> "SubscriptionUpsertModel":
        return cls(customer_id=customer_id, **snapshot.model_dump())

"""
Domain models for Stripe webhook payloads.

Strongly-typed Pydantic models for Stripe payment platform webhook events.
Only the fields this service reads are declared; everything else is ignored
so new Stripe fields never break decoding.
"""

from typing import Optional, Any
from enum import Enum
from pydantic import BaseModel, ConfigDict


class StripeWebhookType(str, Enum):
    """Stripe webhook event types we act on."""

    # Checkout
    CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"
    CHECKOUT_SESSION_ASYNC_PAYMENT_SUCCEEDED = (
        "checkout.session.async_payment_succeeded"
    )

    # Subscription
    SUBSCRIPTION_CREATED = "customer.subscription.created"
    SUBSCRIPTION_UPDATED = "customer.subscription.updated"
    SUBSCRIPTION_DELETED = "customer.subscription.deleted"
    SUBSCRIPTION_PAUSED = "customer.subscription.paused"
    SUBSCRIPTION_RESUMED = "customer.subscription.resumed"
    SUBSCRIPTION_PENDING_UPDATE_APPLIED = (
        "customer.subscription.pending_update_applied"
    )
    SUBSCRIPTION_PENDING_UPDATE_EXPIRED = (
        "customer.subscription.pending_update_expired"
    )
    SUBSCRIPTION_TRIAL_WILL_END = "customer.subscription.trial_will_end"

    # Invoice
    INVOICE_PAID = "invoice.paid"
    INVOICE_PAYMENT_FAILED = "invoice.payment_failed"
    INVOICE_PAYMENT_ACTION_REQUIRED = "invoice.payment_action_required"
    INVOICE_PAYMENT_SUCCEEDED = "invoice.payment_succeeded"
    INVOICE_UPCOMING = "invoice.upcoming"
    INVOICE_MARKED_UNCOLLECTIBLE = "invoice.marked_uncollectible"

    # Payment intent
    PAYMENT_INTENT_SUCCEEDED = "payment_intent.succeeded"
    PAYMENT_INTENT_PAYMENT_FAILED = "payment_intent.payment_failed"
    PAYMENT_INTENT_CANCELED = "payment_intent.canceled"


class StripeCheckoutSessionData(BaseModel):
    """Stripe checkout session object."""

    model_config = ConfigDict(extra="ignore")

    id: str
    customer: Optional[str] = None
    mode: Optional[str] = None
    payment_status: Optional[str] = None
    payment_intent: Optional[str] = None
    amount_subtotal: Optional[int] = None
    amount_total: Optional[int] = None
    currency: Optional[str] = None


class StripeEventData(BaseModel):
    """Stripe event data wrapper."""

    model_config = ConfigDict(extra="ignore")

    object: Optional[dict[str, Any]] = None  # session, subscription, invoice, etc.


class StripeWebhookPayload(BaseModel):
    """Complete Stripe webhook payload."""

    model_config = ConfigDict(extra="ignore")

    # Every field is optional: a drifted envelope decodes and is ignored later
    id: Optional[str] = None
    type: Optional[str] = None
    data: Optional[StripeEventData] = None
    created: Optional[int] = None
    livemode: bool = False

    @property
    def data_object(self) -> Optional[dict[str, Any]]:
        return self.data.object if self.data else None

    @property
    def known_type(self) -> Optional[StripeWebhookType]:
        if self.type is None:
            return None
        try:
            return StripeWebhookType(self.type)
        except ValueError:
            return None

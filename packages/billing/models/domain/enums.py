"""
Billing enums - strongly typed enumerations for subscription and order states.
"""

from enum import Enum


class SubscriptionStatus(str, Enum):
    """
    Subscription status as reported by Stripe.

    NOT_STARTED is the only locally assigned value: the customer exists in
    Stripe but has never had a subscription.
    """

    NOT_STARTED = "not_started"
    INCOMPLETE = "incomplete"
    INCOMPLETE_EXPIRED = "incomplete_expired"
    TRIALING = "trialing"
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    UNPAID = "unpaid"
    PAUSED = "paused"

    def has_access(self) -> bool:
        """Check if this status unlocks premium content."""
        return self == SubscriptionStatus.ACTIVE


class OrderStatus(str, Enum):
    """Local lifecycle of a one-time payment order."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELED = "canceled"


class CheckoutMode(str, Enum):
    """Stripe checkout session modes."""

    PAYMENT = "payment"
    SUBSCRIPTION = "subscription"
    SETUP = "setup"


class CheckoutPaymentStatus(str, Enum):
    """Stripe checkout session payment_status values."""

    PAID = "paid"
    UNPAID = "unpaid"
    NO_PAYMENT_REQUIRED = "no_payment_required"

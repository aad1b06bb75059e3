"""
Maps a verified Stripe event to the action the webhook handler should take.
"""

from typing import Any

from pydantic import ValidationError

from common.core.otel_axiom_exporter import get_logger
from packages.billing.exceptions import MalformedEventError
from packages.billing.models.domain.actions import (
    IgnoreAction,
    RecordOrderAction,
    SyncSubscriptionAction,
    WebhookAction,
)
from packages.billing.models.domain.enums import CheckoutMode, CheckoutPaymentStatus
from packages.billing.models.domain.order import OrderCreateModel
from packages.billing.models.domain.stripe_webhooks import (
    StripeCheckoutSessionData,
    StripeWebhookPayload,
    StripeWebhookType,
)

logger = get_logger(__name__)

CHECKOUT_EVENTS = frozenset(
    {
        StripeWebhookType.CHECKOUT_SESSION_COMPLETED,
        StripeWebhookType.CHECKOUT_SESSION_ASYNC_PAYMENT_SUCCEEDED,
    }
)

# Any of these means the customer's subscription may have changed
SUBSCRIPTION_EVENTS = frozenset(
    {
        StripeWebhookType.SUBSCRIPTION_CREATED,
        StripeWebhookType.SUBSCRIPTION_UPDATED,
        StripeWebhookType.SUBSCRIPTION_DELETED,
        StripeWebhookType.SUBSCRIPTION_PAUSED,
        StripeWebhookType.SUBSCRIPTION_RESUMED,
        StripeWebhookType.SUBSCRIPTION_PENDING_UPDATE_APPLIED,
        StripeWebhookType.SUBSCRIPTION_PENDING_UPDATE_EXPIRED,
        StripeWebhookType.SUBSCRIPTION_TRIAL_WILL_END,
        StripeWebhookType.INVOICE_PAID,
        StripeWebhookType.INVOICE_PAYMENT_FAILED,
        StripeWebhookType.INVOICE_PAYMENT_ACTION_REQUIRED,
        StripeWebhookType.INVOICE_PAYMENT_SUCCEEDED,
        StripeWebhookType.INVOICE_UPCOMING,
        StripeWebhookType.INVOICE_MARKED_UNCOLLECTIBLE,
        StripeWebhookType.PAYMENT_INTENT_PAYMENT_FAILED,
        StripeWebhookType.PAYMENT_INTENT_CANCELED,
    }
)


def classify_event(event: StripeWebhookPayload) -> WebhookAction:
    """
    Decide what a verified event means for local billing state.

    Events without a data object or customer, deliberately skipped types
    and unknown types are ignored. Checkout events are split on mode first and payment_status
    second, so a subscription checkout always syncs.
    """
    data = event.data_object
    if data is None:
        return IgnoreAction(reason="event has no data object")

    if "customer" not in data:
        return IgnoreAction(reason="event has no customer field")

    event_type = event.known_type
    if event_type is None:
        logger.info(f"Unhandled Stripe webhook type: {event.type}")
        return IgnoreAction(reason=f"unhandled event type {event.type}")

    # One-time payments are recorded from the checkout session instead
    if event_type == StripeWebhookType.PAYMENT_INTENT_SUCCEEDED:
        return IgnoreAction(reason="payment intents are handled via checkout")

    customer_id = data["customer"]
    if not customer_id or not isinstance(customer_id, str):
        logger.error(
            f"No customer received on event: {event.id}",
            extra={"event_id": event.id, "event_type": event.type},
        )
        return IgnoreAction(reason="customer is not a string id")

    if event_type in CHECKOUT_EVENTS:
        try:
            return _classify_checkout(data, customer_id)
        except MalformedEventError as e:
            logger.error(
                f"Malformed checkout session on event {event.id}: {str(e)}",
                extra={"event_id": event.id, "event_type": event.type},
            )
            return IgnoreAction(reason=str(e))

    if event_type in SUBSCRIPTION_EVENTS:
        return SyncSubscriptionAction(customer_id=customer_id)

    return IgnoreAction(reason=f"no action for event type {event.type}")


def _classify_checkout(data: dict[str, Any], customer_id: str) -> WebhookAction:
    # Mode decides the branch on its own; the rest of the session is only
    # needed for one-time payments
    mode = data.get("mode")
    is_subscription = mode == CheckoutMode.SUBSCRIPTION.value
    logger.info(
        f"Processing {'subscription' if is_subscription else 'one-time payment'} checkout session",
        extra={"session_id": data.get("id"), "customer_id": customer_id},
    )

    if is_subscription:
        return SyncSubscriptionAction(customer_id=customer_id)

    if mode != CheckoutMode.PAYMENT.value:
        return IgnoreAction(reason=f"checkout mode {mode} is not handled")

    try:
        session = StripeCheckoutSessionData.model_validate(data)
    except ValidationError as e:
        raise MalformedEventError("checkout session could not be decoded") from e

    if session.payment_status != CheckoutPaymentStatus.PAID.value:
        return IgnoreAction(
            reason=f"checkout payment_status is {session.payment_status}"
        )

    if session.amount_total is None or session.currency is None:
        raise MalformedEventError(
            f"paid checkout session {session.id} has no amount or currency"
        )

    return RecordOrderAction(
        order=OrderCreateModel(
            checkout_session_id=session.id,
            payment_intent_id=session.payment_intent,
            customer_id=customer_id,
            amount_subtotal=session.amount_subtotal,
            amount_total=session.amount_total,
            currency=session.currency,
            payment_status=session.payment_status,
        )
    )

"""
Stripe webhook handler for billing events.

Drives a raw request through verification, classification and the
resulting state change:
- Subscription checkouts and lifecycle events re-sync the customer's subscription
- Paid one-time checkouts are recorded as orders
- Everything else is acknowledged and ignored

There is no retry logic here. Any failure propagates to the endpoint, which
answers non-2xx so Stripe redelivers the event later.
"""

from typing import Optional

from common.core.otel_axiom_exporter import (
    get_logger,
    log_span_event,
    tag_current_span,
    trace_span,
)
from packages.billing.models.domain.actions import (
    IgnoreAction,
    RecordOrderAction,
    SyncSubscriptionAction,
    WebhookAction,
)
from packages.billing.services.order_service import OrderService
from packages.billing.services.subscription_sync_service import SubscriptionSyncService
from packages.billing.webhooks.classifier import classify_event
from packages.billing.webhooks.signature import StripeSignatureVerifier

logger = get_logger(__name__)


class StripeWebhookHandler:
    """Verify → classify → apply, for one delivery at a time."""

    def __init__(
        self,
        verifier: StripeSignatureVerifier,
        sync_service: SubscriptionSyncService,
        order_service: OrderService,
    ):
        self.verifier = verifier
        self.sync_service = sync_service
        self.order_service = order_service

    @trace_span
    async def handle(
        self, raw_body: bytes, signature_header: Optional[str]
    ) -> WebhookAction:
        """
        Process one webhook delivery.

        Returns:
            The action that was applied

        Raises:
            SignatureInvalidError, MalformedEventError: Request rejected
            ProviderUnavailableError, PersistenceError: Apply failed, retry later
        """
        event = self.verifier.verify(raw_body, signature_header)

        logger.info(
            f"Received Stripe webhook: {event.type}",
            extra={
                "event_id": event.id,
                "event_type": event.type,
                "livemode": event.livemode,
            },
        )

        action = classify_event(event)
        tag_current_span(
            {
                "stripe.event_id": event.id,
                "stripe.event_type": event.type,
                "billing.action": action.kind,
            }
        )
        await self.apply(action)
        return action

    @trace_span
    async def apply(self, action: WebhookAction) -> None:
        """Perform the state change for a classified event."""
        if isinstance(action, SyncSubscriptionAction):
            await self.sync_service.sync(action.customer_id)
        elif isinstance(action, RecordOrderAction):
            await self.order_service.record(action.order)
        elif isinstance(action, IgnoreAction):
            log_span_event("Stripe webhook ignored", {"reason": action.reason})
        else:
            raise TypeError(f"Unknown webhook action: {action!r}")

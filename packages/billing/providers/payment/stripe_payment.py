"""
Stripe implementation of payment provider.
"""

from typing import Any, Optional
import stripe

from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.billing.exceptions import ProviderUnavailableError
from packages.billing.models.domain.enums import SubscriptionStatus
from packages.billing.models.domain.subscription import SubscriptionSnapshot
from packages.billing.providers.payment.interface import PaymentProviderInterface

logger = get_logger(__name__)


class StripePaymentProvider(PaymentProviderInterface):
    """Stripe-based payment implementation. Read-only."""

    def __init__(self, api_key: str, api_version: Optional[str] = None):
        """
        Credentials are sent per request rather than through the module-level
        ``stripe.api_key`` so several providers can coexist in one process.
        """
        self.api_key = api_key
        self.api_version = api_version

    def _request_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {"api_key": self.api_key}
        if self.api_version:
            options["stripe_version"] = self.api_version
        return options

    @trace_span
    async def get_latest_subscription(
        self, customer_id: str
    ) -> Optional[SubscriptionSnapshot]:
        """
        Fetch the most recent Stripe subscription for a customer.

        Lists with limit=1 and status=all so canceled subscriptions are
        reported too, and expands the default payment method so card display
        fields are available without a second call.
        """
        try:
            subscriptions = await stripe.Subscription.list_async(
                customer=customer_id,
                limit=1,
                status="all",
                expand=["data.default_payment_method"],
                **self._request_options(),
            )
        except stripe.StripeError as e:
            logger.error(
                f"Failed to list Stripe subscriptions: {str(e)}",
                extra={"customer_id": customer_id, "error": str(e)},
            )
            raise ProviderUnavailableError(
                f"Stripe subscription lookup failed for customer {customer_id}: {e}"
            ) from e

        data = subscriptions["data"]
        if not data:
            return None

        # Assumes a customer holds a single subscription
        return self._to_snapshot(data[0])

    def _to_snapshot(self, subscription: Any) -> SubscriptionSnapshot:
        items = subscription["items"]["data"]
        price_id = items[0]["price"]["id"] if items else None

        try:
            status = SubscriptionStatus(subscription["status"])
        except ValueError as e:
            raise ProviderUnavailableError(
                f"Unrecognised Stripe subscription status: {subscription['status']}"
            ) from e

        brand, last4 = self._card_details(subscription["default_payment_method"])

        return SubscriptionSnapshot(
            subscription_id=subscription["id"],
            price_id=price_id,
            status=status,
            cancel_at_period_end=bool(subscription["cancel_at_period_end"]),
            payment_method_brand=brand,
            payment_method_last4=last4,
        )

    @staticmethod
    def _card_details(payment_method: Any) -> tuple[Optional[str], Optional[str]]:
        # Unexpanded references arrive as a bare "pm_..." id
        if not payment_method or isinstance(payment_method, str):
            return None, None
        if payment_method["type"] != "card" or not payment_method["card"]:
            return None, None

        card = payment_method["card"]
        return card["brand"], card["last4"]

    @trace_span
    async def health_check(self) -> bool:
        """Check Stripe health."""
        try:
            # Try to retrieve account to verify API key works
            await stripe.Account.retrieve_async(**self._request_options())
            return True
        except stripe.StripeError as e:
            logger.error(f"Payment health check failed: {e}")
            return False

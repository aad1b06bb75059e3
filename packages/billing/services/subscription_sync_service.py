"""
Service that mirrors a customer's Stripe subscription into local storage.
"""

from sqlalchemy.exc import SQLAlchemyError

from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.billing.exceptions import PersistenceError
from packages.billing.models.domain.subscription import (
    Subscription,
    SubscriptionUpsertModel,
)
from packages.billing.providers.payment.interface import PaymentProviderInterface
from packages.billing.repositories.subscription_repository import SubscriptionRepository

logger = get_logger(__name__)


class SubscriptionSyncService:
    """
    Snapshot sync of subscription state.

    The triggering event is only a signal that something changed. The
    current state is always re-fetched from the payment provider and the
    whole row is replaced, so replays and out-of-order deliveries converge
    on the provider's latest state.
    """

    def __init__(
        self,
        payment_provider: PaymentProviderInterface,
        subscription_repo: SubscriptionRepository,
    ):
        self.payment = payment_provider
        self.subscription_repo = subscription_repo

    @trace_span
    async def sync(self, customer_id: str) -> Subscription:
        """
        Fetch the customer's latest subscription and upsert it.

        Raises:
            ProviderUnavailableError: Stripe could not be queried
            PersistenceError: The upsert failed
        """
        logger.info(f"Starting subscription sync for customer: {customer_id}")

        snapshot = await self.payment.get_latest_subscription(customer_id)

        if snapshot is None:
            logger.info(f"No subscriptions found for customer: {customer_id}")
            record = SubscriptionUpsertModel.not_started(customer_id)
        else:
            record = SubscriptionUpsertModel.from_snapshot(customer_id, snapshot)

        try:
            subscription = await self.subscription_repo.upsert_snapshot(record)
        except SQLAlchemyError as e:
            logger.error(
                f"Error syncing subscription: {str(e)}",
                extra={"customer_id": customer_id, "error": str(e)},
            )
            raise PersistenceError(
                f"Failed to sync subscription for customer {customer_id}"
            ) from e

        logger.info(
            f"Successfully synced subscription for customer: {customer_id}",
            extra={
                "customer_id": customer_id,
                "subscription_id": subscription.subscription_id,
                "status": subscription.status.value,
            },
        )
        return subscription

"""
Interface for payment providers.

Abstracts payment-platform reads away from specific platforms (Stripe, Paddle, etc.)
"""

from abc import ABC, abstractmethod
from typing import Optional

from packages.billing.models.domain.subscription import SubscriptionSnapshot


class PaymentProviderInterface(ABC):
    """Abstract interface for payment providers."""

    @abstractmethod
    async def get_latest_subscription(
        self, customer_id: str
    ) -> Optional[SubscriptionSnapshot]:
        """
        Fetch the customer's most recent subscription in any status.

        Args:
            customer_id: Payment provider customer ID

        Returns:
            The current snapshot, or None if the customer never subscribed

        Raises:
            ProviderUnavailableError: The provider could not be queried
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the payment backend is available and healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass

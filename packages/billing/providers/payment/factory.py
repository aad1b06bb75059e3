"""
Factory for getting payment provider instance.
"""

from common.core.config import Settings
from packages.billing.providers.payment.interface import PaymentProviderInterface
from packages.billing.providers.payment.stripe_payment import StripePaymentProvider


def get_payment_provider(settings: Settings) -> PaymentProviderInterface:
    """
    Build the payment provider from configuration.

    Currently only Stripe is supported, but this abstraction allows
    swapping to another platform and substituting a fake in tests.

    Returns:
        PaymentProviderInterface: Configured payment provider
    """
    return StripePaymentProvider(
        api_key=settings.stripe_secret_key,
        api_version=settings.stripe_api_version,
    )

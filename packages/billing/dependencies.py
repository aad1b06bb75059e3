"""
Construction and injection of the webhook pipeline.

Everything that talks to Stripe or the database is built once at startup
from settings and handed down explicitly; nothing reads a module-level
client. Tests override ``get_webhook_handler`` with a handler built from
fakes.
"""

from typing import Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from common.core.config import Settings
from packages.billing.providers.payment.factory import get_payment_provider
from packages.billing.providers.payment.interface import PaymentProviderInterface
from packages.billing.repositories.order_repository import OrderRepository
from packages.billing.repositories.subscription_repository import SubscriptionRepository
from packages.billing.services.order_service import OrderService
from packages.billing.services.subscription_sync_service import SubscriptionSyncService
from packages.billing.webhooks.signature import StripeSignatureVerifier
from packages.billing.webhooks.stripe_webhook import StripeWebhookHandler


def build_webhook_handler(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession],
    payment_provider: Optional[PaymentProviderInterface] = None,
) -> StripeWebhookHandler:
    """Wire verifier, synchronizer and order recorder together."""
    payment = payment_provider or get_payment_provider(settings)

    return StripeWebhookHandler(
        verifier=StripeSignatureVerifier(
            secret=settings.stripe_webhook_secret,
            tolerance=settings.stripe_webhook_tolerance,
        ),
        sync_service=SubscriptionSyncService(
            payment_provider=payment,
            subscription_repo=SubscriptionRepository(session_factory),
        ),
        order_service=OrderService(order_repo=OrderRepository(session_factory)),
    )


def get_webhook_handler(request: Request) -> StripeWebhookHandler:
    """FastAPI dependency returning the handler built in the app lifespan."""
    return request.app.state.webhook_handler


def get_payment_provider_dependency(request: Request) -> PaymentProviderInterface:
    """FastAPI dependency returning the payment provider built in the app lifespan."""
    return request.app.state.payment_provider

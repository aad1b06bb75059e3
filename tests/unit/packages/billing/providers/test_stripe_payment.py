"""
Unit tests for StripePaymentProvider.

The stripe SDK calls are patched; responses are shaped like the
subscription list endpoint returns them.
"""

import pytest
import stripe
from unittest.mock import AsyncMock, patch

from packages.billing.exceptions import ProviderUnavailableError
from packages.billing.models.domain.enums import SubscriptionStatus
from packages.billing.providers.payment.stripe_payment import StripePaymentProvider
from tests.factories.stripe_event_factory import (
    card_payment_method,
    subscription_list,
    subscription_object,
)


@pytest.fixture
def provider():
    return StripePaymentProvider(api_key="sk_test_dummy", api_version="2025-06-30.basil")


@pytest.mark.asyncio
class TestStripePaymentProvider:
    """Tests for subscription lookup and mapping."""

    async def test_lists_latest_subscription_with_expanded_payment_method(self, provider):
        list_mock = AsyncMock(return_value=subscription_list(subscription_object()))

        with patch.object(stripe.Subscription, "list_async", list_mock):
            await provider.get_latest_subscription("cus_123")

        list_mock.assert_awaited_once_with(
            customer="cus_123",
            limit=1,
            status="all",
            expand=["data.default_payment_method"],
            api_key="sk_test_dummy",
            stripe_version="2025-06-30.basil",
        )

    async def test_maps_subscription_with_card(self, provider):
        response = subscription_list(
            subscription_object(
                status="trialing",
                price_id="price_abc",
                cancel_at_period_end=True,
                default_payment_method=card_payment_method("mastercard", "4444"),
            )
        )

        with patch.object(
            stripe.Subscription, "list_async", AsyncMock(return_value=response)
        ):
            result = await provider.get_latest_subscription("cus_123")

        assert result.subscription_id == "sub_test_123"
        assert result.price_id == "price_abc"
        assert result.status == SubscriptionStatus.TRIALING
        assert result.cancel_at_period_end is True
        assert result.payment_method_brand == "mastercard"
        assert result.payment_method_last4 == "4444"

    async def test_no_subscriptions_returns_none(self, provider):
        with patch.object(
            stripe.Subscription,
            "list_async",
            AsyncMock(return_value=subscription_list()),
        ):
            assert await provider.get_latest_subscription("cus_123") is None

    async def test_unexpanded_payment_method_has_no_card_fields(self, provider):
        response = subscription_list(
            subscription_object(default_payment_method="pm_123")
        )

        with patch.object(
            stripe.Subscription, "list_async", AsyncMock(return_value=response)
        ):
            result = await provider.get_latest_subscription("cus_123")

        assert result.payment_method_brand is None
        assert result.payment_method_last4 is None

    async def test_non_card_payment_method_has_no_card_fields(self, provider):
        payment_method = {"id": "pm_1", "type": "sepa_debit", "card": None}
        response = subscription_list(
            subscription_object(default_payment_method=payment_method)
        )

        with patch.object(
            stripe.Subscription, "list_async", AsyncMock(return_value=response)
        ):
            result = await provider.get_latest_subscription("cus_123")

        assert result.payment_method_brand is None

    async def test_unrecognised_status_rejected(self, provider):
        response = subscription_list(subscription_object(status="something_new"))

        with patch.object(
            stripe.Subscription, "list_async", AsyncMock(return_value=response)
        ):
            with pytest.raises(ProviderUnavailableError):
                await provider.get_latest_subscription("cus_123")

    async def test_stripe_error_wrapped(self, provider):
        with patch.object(
            stripe.Subscription,
            "list_async",
            AsyncMock(side_effect=stripe.APIConnectionError("Network down")),
        ):
            with pytest.raises(ProviderUnavailableError):
                await provider.get_latest_subscription("cus_123")

    async def test_health_check(self, provider):
        with patch.object(stripe.Account, "retrieve_async", AsyncMock()):
            assert await provider.health_check() is True

        with patch.object(
            stripe.Account,
            "retrieve_async",
            AsyncMock(side_effect=stripe.AuthenticationError("bad key")),
        ):
            assert await provider.health_check() is False

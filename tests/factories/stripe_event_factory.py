"""Builders for signed Stripe webhook deliveries and API objects."""

import hashlib
import hmac
import json
import time
from typing import Any, Optional
from uuid import uuid4

from packages.billing.models.domain.enums import SubscriptionStatus
from packages.billing.models.domain.subscription import SubscriptionSnapshot

TEST_WEBHOOK_SECRET = "whsec_test_secret"
TEST_CUSTOMER_ID = "cus_123"


def sign_payload(
    payload: bytes,
    secret: str = TEST_WEBHOOK_SECRET,
    timestamp: Optional[int] = None,
) -> str:
    """Build a Stripe-Signature header the way Stripe does."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed_payload = f"{timestamp}.".encode("utf-8") + payload
    signature = hmac.new(
        secret.encode("utf-8"), signed_payload, hashlib.sha256
    ).hexdigest()
    return f"t={timestamp},v1={signature}"


def make_event(
    event_type: str, data_object: dict[str, Any], event_id: Optional[str] = None
) -> dict[str, Any]:
    return {
        "id": event_id or f"evt_{uuid4().hex[:24]}",
        "object": "event",
        "type": event_type,
        "api_version": "2025-06-30.basil",
        "created": int(time.time()),
        "livemode": False,
        "data": {"object": data_object},
    }


def encode_event(event: dict[str, Any]) -> bytes:
    return json.dumps(event, separators=(",", ":")).encode("utf-8")


def signed_delivery(
    event: dict[str, Any], secret: str = TEST_WEBHOOK_SECRET
) -> tuple[bytes, str]:
    """Return (raw_body, signature_header) for an event."""
    body = encode_event(event)
    return body, sign_payload(body, secret=secret)


def checkout_session(
    customer: Optional[str] = TEST_CUSTOMER_ID,
    mode: str = "subscription",
    payment_status: str = "paid",
    session_id: str = "cs_test_123",
    payment_intent: Optional[str] = "pi_test_123",
    amount_subtotal: Optional[int] = 1000,
    amount_total: Optional[int] = 1200,
    currency: Optional[str] = "usd",
) -> dict[str, Any]:
    return {
        "id": session_id,
        "object": "checkout.session",
        "customer": customer,
        "mode": mode,
        "payment_status": payment_status,
        "status": "complete",
        "payment_intent": payment_intent if mode == "payment" else None,
        "subscription": "sub_test_123" if mode == "subscription" else None,
        "amount_subtotal": amount_subtotal,
        "amount_total": amount_total,
        "currency": currency,
    }


def subscription_object(
    customer: str = TEST_CUSTOMER_ID,
    subscription_id: str = "sub_test_123",
    status: str = "active",
    price_id: str = "price_abc",
    cancel_at_period_end: bool = False,
    default_payment_method: Any = None,
) -> dict[str, Any]:
    """Stripe subscription object as returned by the list endpoint."""
    return {
        "id": subscription_id,
        "object": "subscription",
        "customer": customer,
        "status": status,
        "cancel_at_period_end": cancel_at_period_end,
        "default_payment_method": default_payment_method,
        "items": {
            "object": "list",
            "data": [
                {
                    "id": "si_test_123",
                    "object": "subscription_item",
                    "price": {"id": price_id, "object": "price"},
                }
            ],
        },
    }


def card_payment_method(brand: str = "visa", last4: str = "4242") -> dict[str, Any]:
    return {
        "id": "pm_test_123",
        "object": "payment_method",
        "type": "card",
        "card": {"brand": brand, "last4": last4},
    }


def subscription_list(*subscriptions: dict[str, Any]) -> dict[str, Any]:
    return {"object": "list", "data": list(subscriptions), "has_more": False}


def snapshot(
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
    price_id: Optional[str] = "price_abc",
    subscription_id: str = "sub_test_123",
    cancel_at_period_end: bool = False,
    payment_method_brand: Optional[str] = None,
    payment_method_last4: Optional[str] = None,
) -> SubscriptionSnapshot:
    return SubscriptionSnapshot(
        subscription_id=subscription_id,
        price_id=price_id,
        status=status,
        cancel_at_period_end=cancel_at_period_end,
        payment_method_brand=payment_method_brand,
        payment_method_last4=payment_method_last4,
    )

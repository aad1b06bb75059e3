"""
Stripe webhook signature verification.

Verification runs over the exact bytes received on the wire. The body is
decoded into a typed payload only after the signature matched.
"""

import hashlib
from typing import Optional

import stripe
from pydantic import ValidationError

from common.core.otel_axiom_exporter import get_logger
from packages.billing.exceptions import MalformedEventError, SignatureInvalidError
from packages.billing.models.domain.stripe_webhooks import StripeWebhookPayload

logger = get_logger(__name__)

SIGNATURE_HEADER = "stripe-signature"
DEFAULT_TOLERANCE_SECONDS = 300


def _header_fingerprint(signature_header: str) -> str:
    """Short digest of the header so logs can correlate retries without storing it."""
    return hashlib.sha256(signature_header.encode("utf-8")).hexdigest()[:12]


def _header_timestamp(signature_header: str) -> Optional[str]:
    for part in signature_header.split(","):
        key, _, value = part.strip().partition("=")
        if key == "t":
            return value
    return None


class StripeSignatureVerifier:
    """Verifies Stripe-Signature headers against a shared endpoint secret."""

    def __init__(self, secret: str, tolerance: int = DEFAULT_TOLERANCE_SECONDS):
        if not secret:
            raise ValueError("Stripe webhook secret must be configured")
        self._secret = secret
        self.tolerance = tolerance

    def verify(
        self, raw_body: bytes, signature_header: Optional[str]
    ) -> StripeWebhookPayload:
        """
        Verify the signature and decode the event.

        Args:
            raw_body: Request body exactly as received
            signature_header: Value of the Stripe-Signature header

        Returns:
            The decoded event

        Raises:
            SignatureInvalidError: Header missing, malformed, stale or not matching
            MalformedEventError: Signature valid but body is not JSON
        """
        if not signature_header:
            raise SignatureInvalidError("No signature found")

        try:
            payload = raw_body.decode("utf-8")
            stripe.WebhookSignature.verify_header(
                payload, signature_header, self._secret, self.tolerance
            )
        except (stripe.SignatureVerificationError, UnicodeDecodeError) as e:
            logger.error(
                f"Webhook signature verification failed: {str(e)}",
                extra={
                    "header_timestamp": _header_timestamp(signature_header),
                    "header_fingerprint": _header_fingerprint(signature_header),
                    "body_bytes": len(raw_body),
                    "tolerance": self.tolerance,
                },
            )
            raise SignatureInvalidError(str(e)) from e

        try:
            return StripeWebhookPayload.model_validate_json(raw_body)
        except ValidationError as e:
            errors = e.errors(include_url=False)
            if any(error["type"] == "json_invalid" for error in errors):
                logger.error(
                    "Stripe webhook body is not valid JSON",
                    extra={"body_bytes": len(raw_body)},
                )
                raise MalformedEventError("Invalid webhook payload") from e

            # Signed JSON with an unexpected shape is schema drift, not an attack
            logger.warning(
                "Stripe webhook envelope has unexpected shape",
                extra={"validation_errors": errors},
            )
            return StripeWebhookPayload()

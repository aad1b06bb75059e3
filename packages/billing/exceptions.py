"""
Billing error taxonomy.

SignatureInvalidError and MalformedEventError describe the inbound request and
are answered with 400. ProviderUnavailableError and PersistenceError are
transient; they are answered with 500 so Stripe redelivers the event later.
"""

from common.core.exceptions import (
    AppException,
    ExternalServiceError,
    StorageError,
    ValidationError,
)


class BillingError(AppException):
    """Base class for billing webhook errors."""

    pass


class SignatureInvalidError(BillingError):
    """Webhook signature header is missing, malformed or does not match."""

    pass


class MalformedEventError(BillingError, ValidationError):
    """Verified payload lacks a field this service needs."""

    pass


class ProviderUnavailableError(BillingError, ExternalServiceError):
    """Stripe API call failed (network, rate limit, auth)."""

    pass


class PersistenceError(BillingError, StorageError):
    """Local storage rejected a write."""

    pass

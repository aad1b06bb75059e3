"""Global rate limiter instance for SlowAPI."""

from slowapi import Limiter
from slowapi.util import get_remote_address
from common.core.config import settings

# Only routes decorated with @limiter.limit are throttled. Stripe deliveries
# arrive in bursts and must never be rejected by the limiter.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],
    storage_uri=settings.rate_limit_storage_uri,
)

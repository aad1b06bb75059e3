# Shared pytest configuration and fixtures for all test types
import os

# Settings are read at import time, so credentials must exist before the app loads
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_secret")

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from slowapi import Limiter
from slowapi.util import get_remote_address
from unittest.mock import AsyncMock, patch

# Create test limiter with no limits and in-memory storage
test_limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],
    storage_uri="memory://",
)

# Patch the limiter before importing the app so decorators use test limiter
with patch("common.providers.rate_limiter.limiter.limiter", test_limiter):
    from api.main import app

from common.core.config import Settings
from common.db.base import Base
from packages.billing.dependencies import (
    build_webhook_handler,
    get_payment_provider_dependency,
    get_webhook_handler,
)
from packages.billing.models.database import (  # noqa: F401 - registers tables
    CustomerSubscriptionEntity,
    StripeOrderEntity,
)
from packages.billing.providers.payment.interface import PaymentProviderInterface
from packages.billing.repositories.order_repository import OrderRepository
from packages.billing.repositories.subscription_repository import SubscriptionRepository
from tests.factories.stripe_event_factory import TEST_WEBHOOK_SECRET, snapshot

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine and initialize schema."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_connection(test_engine):
    """Create test connection with outer transaction for rollback isolation."""
    async with test_engine.connect() as connection:
        trans = await connection.begin()
        yield connection
        await trans.rollback()


@pytest_asyncio.fixture(scope="function")
async def test_session_factory(test_connection):
    """Create session factory bound to test connection.

    Using join_transaction_mode="create_savepoint" so each repository
    commit releases a savepoint instead of ending the outer transaction.
    """
    return async_sessionmaker(
        bind=test_connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )


@pytest_asyncio.fixture(scope="function")
async def subscription_repo(test_session_factory):
    return SubscriptionRepository(test_session_factory)


@pytest_asyncio.fixture(scope="function")
async def order_repo(test_session_factory):
    return OrderRepository(test_session_factory)


@pytest_asyncio.fixture(scope="function")
async def mock_payment_provider():
    """Payment provider reporting one active subscription on price_abc."""
    provider = AsyncMock(spec=PaymentProviderInterface)
    provider.get_latest_subscription = AsyncMock(return_value=snapshot())
    provider.health_check = AsyncMock(return_value=True)
    return provider


@pytest_asyncio.fixture(scope="function")
async def test_settings():
    return Settings(
        _env_file=None,
        stripe_secret_key="sk_test_dummy",
        stripe_webhook_secret=TEST_WEBHOOK_SECRET,
    )


@pytest_asyncio.fixture(scope="function")
async def webhook_handler(test_settings, test_session_factory, mock_payment_provider):
    """Real pipeline wired to the test database and a fake Stripe."""
    return build_webhook_handler(
        test_settings, test_session_factory, payment_provider=mock_payment_provider
    )


@pytest_asyncio.fixture(scope="function")
async def client(webhook_handler, test_session_factory, mock_payment_provider):
    """Create a test client."""
    app.dependency_overrides[get_webhook_handler] = lambda: webhook_handler
    app.dependency_overrides[get_payment_provider_dependency] = (
        lambda: mock_payment_provider
    )
    # get_db reads the factory from app state, which the lifespan normally sets
    app.state.session_factory = test_session_factory

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()

"""
Repository for customer subscription snapshots.
"""

from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from common.repositories.base import BaseRepository
from packages.billing.models.database.subscription import CustomerSubscriptionEntity
from packages.billing.models.domain.subscription import (
    Subscription,
    SubscriptionUpsertModel,
)
from common.core.otel_axiom_exporter import trace_span


class SubscriptionRepository(BaseRepository[CustomerSubscriptionEntity, Subscription]):
    """Repository for managing customer subscriptions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(CustomerSubscriptionEntity, Subscription, session_factory)

    @trace_span
    async def get_by_customer_id(self, customer_id: str) -> Optional[Subscription]:
        """Get the stored subscription snapshot for a customer."""
        async with self._get_session() as session:
            result = await session.execute(
                select(CustomerSubscriptionEntity).where(
                    CustomerSubscriptionEntity.customer_id == customer_id
                )
            )
            db_subscription = result.scalar_one_or_none()
            return self._entity_to_domain(db_subscription) if db_subscription else None

    @trace_span
    async def upsert_snapshot(self, snapshot: SubscriptionUpsertModel) -> Subscription:
        """Replace the customer's row with the given snapshot."""
        return await self.upsert(snapshot, conflict_columns=["customer_id"])

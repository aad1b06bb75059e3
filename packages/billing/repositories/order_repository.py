"""
Repository for one-time payment orders.
"""

from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from common.repositories.base import BaseRepository
from packages.billing.models.database.order import StripeOrderEntity
from packages.billing.models.domain.order import Order, OrderCreateModel
from common.core.otel_axiom_exporter import trace_span


class OrderRepository(BaseRepository[StripeOrderEntity, Order]):
    """Repository for append-only order records. There is no update path."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(StripeOrderEntity, Order, session_factory)

    @trace_span
    async def create_once(self, order: OrderCreateModel) -> Optional[Order]:
        """Insert the order unless its checkout session was already recorded."""
        return await self.insert_ignore(order, conflict_columns=["checkout_session_id"])

    @trace_span
    async def get_by_checkout_session_id(
        self, checkout_session_id: str
    ) -> Optional[Order]:
        async with self._get_session() as session:
            result = await session.execute(
                select(StripeOrderEntity).where(
                    StripeOrderEntity.checkout_session_id == checkout_session_id
                )
            )
            db_order = result.scalar_one_or_none()
            return self._entity_to_domain(db_order) if db_order else None

    @trace_span
    async def get_by_customer_id(
        self, customer_id: str, limit: int = 100, offset: int = 0
    ) -> list[Order]:
        """Get orders for a customer, newest first."""
        async with self._get_session() as session:
            result = await session.execute(
                select(StripeOrderEntity)
                .where(StripeOrderEntity.customer_id == customer_id)
                .order_by(StripeOrderEntity.created_at.desc(), StripeOrderEntity.id.desc())
                .limit(limit)
                .offset(offset)
            )
            db_orders = result.scalars().all()
            return self._entities_to_domain(db_orders)

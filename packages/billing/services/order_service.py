"""
Service for recording completed one-time payments.
"""

from typing import Optional
from sqlalchemy.exc import SQLAlchemyError

from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.billing.exceptions import PersistenceError
from packages.billing.models.domain.order import Order, OrderCreateModel
from packages.billing.repositories.order_repository import OrderRepository

logger = get_logger(__name__)


class OrderService:
    """Service for order recording."""

    def __init__(self, order_repo: OrderRepository):
        self.order_repo = order_repo

    @trace_span
    async def record(self, order: OrderCreateModel) -> Optional[Order]:
        """
        Insert an order for a paid checkout session.

        Returns None when the checkout session was already recorded
        (redelivered event).

        Raises:
            PersistenceError: The insert was rejected
        """
        try:
            created = await self.order_repo.create_once(order)
        except SQLAlchemyError as e:
            logger.error(
                f"Error inserting order: {str(e)}",
                extra={
                    "checkout_session_id": order.checkout_session_id,
                    "error": str(e),
                },
            )
            raise PersistenceError(
                f"Failed to record order for session {order.checkout_session_id}"
            ) from e

        if created is None:
            logger.info(
                f"Order already recorded for session: {order.checkout_session_id}"
            )
            return None

        logger.info(
            f"Successfully processed one-time payment for session: {order.checkout_session_id}",
            extra={
                "order_id": created.id,
                "customer_id": created.customer_id,
                "amount_total": created.amount_total,
                "currency": created.currency,
            },
        )
        return created

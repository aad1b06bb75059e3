"""
Database entity for one-time payment orders.
"""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from common.db.base import Base, BigIntegerType


class StripeOrderEntity(Base):
    """
    One-time payment order database entity.

    Append-only. checkout_session_id is unique so a redelivered
    checkout event cannot create a second order.
    """

    __tablename__ = "stripe_orders"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    checkout_session_id = Column(String(255), nullable=False, unique=True)
    payment_intent_id = Column(String(255), nullable=True)
    customer_id = Column(String(255), nullable=False, index=True)

    # Amounts in minor currency units
    amount_subtotal = Column(BigIntegerType, nullable=True)  # not always reported
    amount_total = Column(BigIntegerType, nullable=False)
    currency = Column(String(3), nullable=False)

    payment_status = Column(String(50), nullable=False)
    status = Column(
        String(50), nullable=False, server_default="pending"
    )  # pending, completed, canceled

    # Standard timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

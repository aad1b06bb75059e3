"""
Database entity for customer subscriptions.
"""

from sqlalchemy import Boolean, Column, String, DateTime, Index
from sqlalchemy.sql import func, false

from common.db.base import Base, BigIntegerType


class CustomerSubscriptionEntity(Base):
    """
    Customer subscription database entity.

    One row per Stripe customer, overwritten on every sync.
    The unique customer_id is the upsert conflict target.
    """

    __tablename__ = "stripe_subscriptions"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    customer_id = Column(String(255), nullable=False, unique=True, index=True)

    # External platform IDs
    subscription_id = Column(String(255), nullable=True)
    price_id = Column(String(255), nullable=True)

    # Subscription details
    status = Column(
        String(50), nullable=False, index=True
    )  # not_started, incomplete, trialing, active, past_due, canceled, ...
    cancel_at_period_end = Column(Boolean, nullable=False, server_default=false())

    # Display-only card details
    payment_method_brand = Column(String(50), nullable=True)
    payment_method_last4 = Column(String(4), nullable=True)

    # Standard timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (Index("idx_stripe_subscription_id", "subscription_id"),)

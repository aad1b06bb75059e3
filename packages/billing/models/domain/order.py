"""
Domain models for one-time payment orders.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from packages.billing.models.domain.enums import OrderStatus


class Order(BaseModel):
    """Completed one-time payment. Immutable once stored."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    checkout_session_id: str
    payment_intent_id: Optional[str] = None
    customer_id: str
    amount_subtotal: Optional[int] = None
    amount_total: int
    currency: str
    payment_status: str
    status: OrderStatus

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderCreateModel(BaseModel):
    """Model for recording a paid checkout session."""

    checkout_session_id: str
    payment_intent_id: Optional[str] = None
    customer_id: str
    amount_subtotal: Optional[int] = None
    amount_total: int
    currency: str
    payment_status: str
    status: OrderStatus = OrderStatus.COMPLETED

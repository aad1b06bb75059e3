"""
Actions produced by classifying a verified webhook event.

A closed set of variants: every event maps to exactly one of them and the
webhook handler dispatches on the variant type.
"""

from typing import Annotated, Literal, Union
from pydantic import BaseModel, Field

from packages.billing.models.domain.order import OrderCreateModel


class IgnoreAction(BaseModel):
    """Nothing to do. A valid terminal outcome, acknowledged with 200."""

    kind: Literal["ignore"] = "ignore"
    reason: str


class SyncSubscriptionAction(BaseModel):
    """Re-fetch the customer's subscription from Stripe and store it."""

    kind: Literal["sync_subscription"] = "sync_subscription"
    customer_id: str


class RecordOrderAction(BaseModel):
    """Store a paid one-time checkout as an order."""

    kind: Literal["record_order"] = "record_order"
    order: OrderCreateModel

    @property
    def customer_id(self) -> str:
        return self.order.customer_id


WebhookAction = Annotated[
    Union[IgnoreAction, SyncSubscriptionAction, RecordOrderAction],
    Field(discriminator="kind"),
]

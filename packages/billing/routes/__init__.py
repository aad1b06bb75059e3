"""Billing API routes."""

from packages.billing.routes import webhooks

__all__ = ["webhooks"]

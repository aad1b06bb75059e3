"""
Billing package - mirrors Stripe billing state into local storage.

This package integrates with:
- Stripe: Webhook events and subscription lookups

Subscription state is always re-fetched from Stripe on any relevant event;
one-time payments are recorded once per checkout session.
"""

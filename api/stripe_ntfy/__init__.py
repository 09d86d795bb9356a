"""Relay Stripe webhook events to an ntfy topic."""

__version__ = "0.1.0"

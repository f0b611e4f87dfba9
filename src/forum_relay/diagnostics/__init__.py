"""Diagnostics endpoints: connection test, test messages, simulated webhooks."""

from forum_relay.diagnostics.router import router

__all__ = ["router"]

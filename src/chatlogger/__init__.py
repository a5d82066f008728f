"""Relay in-game chat to a webhook."""

__version__ = "1.0.1"

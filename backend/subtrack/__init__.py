"""Subscription tracking backend: classifies recurring-payment emails."""

__version__ = "0.1.0"

"""Logging setup, money and time helpers, input validators."""

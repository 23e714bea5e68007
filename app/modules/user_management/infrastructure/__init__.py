"""Persistence for user accounts."""

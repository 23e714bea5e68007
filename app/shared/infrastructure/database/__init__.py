"""Async session management."""

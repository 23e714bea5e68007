"""Realtime connection registry and room fan-out."""

"""Presentation layer: HTTP routers and schemas."""

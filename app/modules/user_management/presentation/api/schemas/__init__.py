"""Request and response schemas for registration and login."""

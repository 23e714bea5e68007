"""Repository interfaces for users."""

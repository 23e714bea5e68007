"""HTTP layer for accounts."""

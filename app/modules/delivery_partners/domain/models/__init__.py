"""Domain entities and enums."""

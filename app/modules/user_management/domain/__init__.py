"""User domain: the User entity, roles and the repository interface."""

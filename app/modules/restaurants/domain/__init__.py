"""Domain layer: entities, rules and repository interfaces."""

"""Domain layer: entities, markdown rules and exceptions."""

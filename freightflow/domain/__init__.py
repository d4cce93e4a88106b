"""Domain layer: entities and exceptions shared across the service."""

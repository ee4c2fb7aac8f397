"""Domain layer: entities, catalog and error taxonomy."""

"""Infrastructure layer: database access and persistence helpers."""

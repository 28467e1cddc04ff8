"""Infrastructure layer: cache clients, persistence, infrastructure exceptions."""

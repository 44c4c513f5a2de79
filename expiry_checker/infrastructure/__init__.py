"""Infrastructure layer - Adapters, configuration and logging."""

"""Infrastructure layer: cache stores, persistence and role providers."""

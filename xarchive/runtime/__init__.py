"""Runtime layer: REST execution and pagination."""

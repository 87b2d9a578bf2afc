"""Infrastructure layer: HTTP transport and upstream API clients."""

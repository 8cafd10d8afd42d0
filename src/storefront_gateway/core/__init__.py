"""Core application infrastructure: configuration, errors, lifespan, middleware."""

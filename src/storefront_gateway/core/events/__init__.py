"""Application lifecycle events."""

from storefront_gateway.core.events.lifespan import lifespan


__all__ = ["lifespan"]

"""Application lifecycle events."""

from restaurant_reviews.core.events.lifespan import attach_services, lifespan


__all__ = ["attach_services", "lifespan"]

"""Gateway API routes."""

from services.gateway.routes import verifications


__all__ = ["verifications"]

"""API route handlers."""

from api.routes import claims, health, info

__all__ = ["claims", "health", "info"]

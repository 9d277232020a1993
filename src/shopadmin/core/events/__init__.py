"""Application lifecycle events."""

from shopadmin.core.events.lifespan import build_maintenance_service, lifespan


__all__ = ["build_maintenance_service", "lifespan"]

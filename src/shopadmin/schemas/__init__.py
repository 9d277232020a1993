"""API schemas."""

from shopadmin.schemas.base import APIResponse
from shopadmin.schemas.health import HealthResponse, ReadinessResponse
from shopadmin.schemas.maintenance import (
    LoadedModule,
    Notification,
    NotificationType,
    RestartConfirmation,
    SystemInfoSnapshot,
    TaskResult,
)


__all__ = [
    "APIResponse",
    "HealthResponse",
    "LoadedModule",
    "Notification",
    "NotificationType",
    "ReadinessResponse",
    "RestartConfirmation",
    "SystemInfoSnapshot",
    "TaskResult",
]

"""Maintenance schemas.

Response documents for the back-office maintenance endpoints.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from shopadmin.schemas.base import APIResponse


class NotificationType(StrEnum):
    """Kind of flash notification."""

    SUCCESS = "success"
    ERROR = "error"


class TaskResult(APIResponse):
    """Outcome of a synchronous maintenance task."""

    success: bool = Field(..., description="Whether the task completed")
    message: str = Field(..., description="Localized result message")


class RestartConfirmation(APIResponse):
    """Confirmation document shown before a restart is executed."""

    return_url: str | None = Field(
        default=None,
        description="Where to send the user after the restart",
    )
    message: str = Field(..., description="Localized confirmation prompt")


class Notification(APIResponse):
    """A one-time message shown to the user on the next page."""

    type: NotificationType = Field(..., description="Notification kind")
    message: str = Field(..., description="Message text")


class LoadedModule(APIResponse):
    """A top-level module loaded into the running interpreter."""

    full_name: str = Field(..., description="Module name and version when known")
    location: str | None = Field(
        default=None,
        description="Module file, or None for built-in or dynamic modules",
    )


class SystemInfoSnapshot(APIResponse):
    """Point-in-time description of the running application and its host.

    Fields backed by an optional or failing subsystem keep their default.
    """

    app_version: str = Field(..., description="Application version")
    server_time_zone: str = Field(..., description="Server time zone name")
    server_local_time: datetime = Field(..., description="Server local time")
    utc_time: datetime = Field(..., description="Current UTC time")
    http_host: str = Field(default="", description="Host header of the request")
    runtime_version: str = Field(..., description="Python implementation and version")
    operating_system: str = Field(..., description="OS description and architecture")
    database_size: int | None = Field(default=None, description="Database size in bytes")
    used_memory_size: int | None = Field(
        default=None,
        description="Process private memory in bytes",
    )
    data_provider_friendly_name: str | None = Field(
        default=None,
        description="Database engine name",
    )
    shrink_database_enabled: bool = Field(
        default=False,
        description="Whether the viewer may shrink the database",
    )
    app_date: datetime | None = Field(
        default=None,
        description="Last write time of the application package",
    )
    loaded_modules: list[LoadedModule] = Field(
        default_factory=list,
        description="Top-level modules in import order",
    )

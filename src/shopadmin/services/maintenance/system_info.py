"""System information collection.

Each value in the snapshot is read independently; a read that fails leaves
its field at the default instead of failing the whole snapshot.
"""

from __future__ import annotations

import gc
import platform
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

import psutil

from shopadmin.auth.permissions import Permission
from shopadmin.observability.logging import get_logger
from shopadmin.schemas.maintenance import LoadedModule, SystemInfoSnapshot


if TYPE_CHECKING:
    from types import ModuleType

    from shopadmin.database.context import DataContext
    from shopadmin.services.maintenance.protocols import Authorizer

logger = get_logger(__name__)

_BYTES_PER_MB = 1024 * 1024


def _default_app_path() -> Path:
    return Path(__file__).resolve().parents[2]


class SystemInfoCollector:
    """Builds ``SystemInfoSnapshot`` documents."""

    def __init__(self, app_version: str, app_path: Path | None = None) -> None:
        self.app_version = app_version
        self.app_path = app_path or _default_app_path()

    async def collect(
        self,
        *,
        http_host: str = "",
        data_context: DataContext | None = None,
        authorizer: Authorizer | None = None,
    ) -> SystemInfoSnapshot:
        """Collect a fresh snapshot for the current viewer."""
        local_now = datetime.now().astimezone()

        snapshot = SystemInfoSnapshot(
            app_version=self.app_version,
            server_time_zone=local_now.tzname() or "UTC",
            server_local_time=local_now,
            utc_time=datetime.now(UTC),
            http_host=http_host,
            runtime_version=self._runtime_version(),
            operating_system=self._operating_system(),
        )

        if data_context is not None:
            snapshot.database_size = await self._database_size(data_context)
            snapshot.data_provider_friendly_name = self._provider_name(data_context)
            snapshot.shrink_database_enabled = self._can_shrink(
                data_context, authorizer
            )

        snapshot.used_memory_size = self._private_memory()
        snapshot.app_date = self._app_date()
        snapshot.loaded_modules = self._loaded_modules()
        return snapshot

    @staticmethod
    def _runtime_version() -> str:
        return f"{platform.python_implementation()} {platform.python_version()}"

    @staticmethod
    def _operating_system() -> str:
        return f"{platform.platform()} ({platform.machine().lower()})"

    async def _database_size(self, data_context: DataContext) -> int | None:
        try:
            size_mb = await data_context.provider.get_database_size_mb()
        except Exception as e:
            logger.debug("Database size unavailable", error=str(e))
            return None
        return round(size_mb * _BYTES_PER_MB)

    def _provider_name(self, data_context: DataContext) -> str | None:
        try:
            return data_context.provider.db_system
        except Exception as e:
            logger.debug("Data provider name unavailable", error=str(e))
            return None

    def _can_shrink(
        self,
        data_context: DataContext,
        authorizer: Authorizer | None,
    ) -> bool:
        try:
            can_shrink = bool(data_context.provider.can_shrink)
        except Exception as e:
            logger.debug("Shrink capability unavailable", error=str(e))
            return False

        return (
            can_shrink
            and authorizer is not None
            and authorizer.has_permission(Permission.MAINTENANCE_READ)
        )

    def _private_memory(self) -> int | None:
        """Unique set size of this process, measured after a full collection."""
        try:
            gc.collect()
            return int(psutil.Process().memory_full_info().uss)
        except Exception as e:
            logger.debug("Private memory size unavailable", error=str(e))
            return None

    def _app_date(self) -> datetime | None:
        try:
            mtime = self.app_path.stat().st_mtime
        except Exception as e:
            logger.debug("Application date unavailable", error=str(e))
            return None
        return datetime.fromtimestamp(mtime).astimezone()

    def _loaded_modules(self) -> list[LoadedModule]:
        try:
            modules = [
                (name, module)
                for name, module in list(sys.modules.items())
                if "." not in name and module is not None
            ]
        except Exception as e:
            logger.debug("Loaded modules unavailable", error=str(e))
            return []

        return [
            LoadedModule(
                full_name=self._module_full_name(name, module),
                location=self._module_location(module),
            )
            for name, module in modules
        ]

    @staticmethod
    def _module_full_name(name: str, module: ModuleType) -> str:
        try:
            version = getattr(module, "__version__", None)
        except Exception:
            return name
        if isinstance(version, str) and version:
            return f"{name} {version}"
        return name

    @staticmethod
    def _module_location(module: ModuleType) -> str | None:
        try:
            location = getattr(module, "__file__", None)
        except Exception:
            return None
        return location if isinstance(location, str) else None

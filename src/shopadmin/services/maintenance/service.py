"""Maintenance service for the back-office.

Implements the operator actions: restarting the application, clearing the
caches, inspecting the running system, forcing a garbage collection and
shrinking the database.
"""

from __future__ import annotations

import asyncio
import gc
from typing import TYPE_CHECKING

from shopadmin.observability.logging import get_logger
from shopadmin.observability.metrics import record_maintenance_action
from shopadmin.schemas.maintenance import RestartConfirmation, TaskResult


if TYPE_CHECKING:
    from shopadmin.core.i18n import Localizer
    from shopadmin.database.context import DataContext
    from shopadmin.schemas.maintenance import SystemInfoSnapshot
    from shopadmin.services.maintenance.protocols import (
        ApplicationCache,
        Authorizer,
        NotificationSink,
        Restarter,
        ScopedMemoryCache,
    )
    from shopadmin.services.maintenance.system_info import SystemInfoCollector

logger = get_logger(__name__)

TASK_SUCCESS_KEY = "Admin.Common.TaskSuccessfullyProcessed"
GC_SUCCESS_KEY = "Admin.System.SystemInfo.GarbageCollectSuccessful"
SHRINK_SUCCESS_KEY = "Common.ShrinkDatabaseSuccessful"
RESTART_CONFIRM_KEY = "Admin.System.SystemInfo.RestartConfirm"


class MaintenanceService:
    """Back-office maintenance actions.

    Authorization happens at the HTTP layer before any method here runs.
    Every action can be repeated safely.
    """

    def __init__(
        self,
        *,
        app_cache: ApplicationCache,
        memory_cache: ScopedMemoryCache,
        restarter: Restarter,
        localizer: Localizer,
        info_collector: SystemInfoCollector,
        data_context: DataContext | None = None,
        gc_settle_delay: float = 0.5,
    ) -> None:
        self._app_cache = app_cache
        self._memory_cache = memory_cache
        self._restarter = restarter
        self._t = localizer
        self._info_collector = info_collector
        self._data_context = data_context
        self._gc_settle_delay = gc_settle_delay

    @property
    def data_context(self) -> DataContext | None:
        return self._data_context

    def describe_restart(self, return_url: str | None = None) -> RestartConfirmation:
        """First phase of a restart: describe what is about to happen."""
        return RestartConfirmation(
            return_url=return_url,
            message=self._t(RESTART_CONFIRM_KEY),
        )

    def restart_application(self) -> None:
        """Second phase of a restart: restart the whole process.

        All in-memory state is lost. Failures are logged and recorded, the
        caller has already been answered.
        """
        logger.warning("Application restart requested")
        try:
            self._restarter.restart()
        except Exception:
            record_maintenance_action("restart", "error")
            raise
        record_maintenance_action("restart", "success")

    async def clear_cache(self) -> TaskResult:
        """Clear the application cache and this process's scoped memory cache.

        Errors propagate to the caller.
        """
        try:
            removed = await self._app_cache.clear()
            pattern = self._memory_cache.build_scoped_key("*")
            removed_local = self._memory_cache.remove_by_pattern(pattern)
        except Exception:
            record_maintenance_action("clear_cache", "error")
            raise

        logger.info(
            "Cache cleared",
            application_keys=removed,
            memory_keys=removed_local,
        )
        record_maintenance_action("clear_cache", "success")
        return TaskResult(success=True, message=self._t(TASK_SUCCESS_KEY))

    async def clear_database_cache(self) -> TaskResult:
        """Clear the query result cache; a no-op when none is configured."""
        query_cache = (
            self._data_context.query_cache if self._data_context is not None else None
        )

        if query_cache is None:
            logger.debug("No query cache configured, nothing to clear")
            record_maintenance_action("clear_database_cache", "skipped")
        else:
            try:
                await query_cache.clear()
            except Exception:
                record_maintenance_action("clear_database_cache", "error")
                raise
            logger.info("Database cache cleared")
            record_maintenance_action("clear_database_cache", "success")

        return TaskResult(success=True, message=self._t(TASK_SUCCESS_KEY))

    async def get_system_info(
        self,
        *,
        http_host: str = "",
        authorizer: Authorizer | None = None,
    ) -> SystemInfoSnapshot:
        """Build a fresh system information snapshot for the viewer."""
        return await self._info_collector.collect(
            http_host=http_host,
            data_context=self._data_context,
            authorizer=authorizer,
        )

    async def garbage_collect(self, notifier: NotificationSink) -> None:
        """Force a full garbage collection and report the outcome.

        Exactly one notification is sent, success or error.
        """
        try:
            gc.collect()
            # Objects released by finalizers in the first pass
            gc.collect()
            await asyncio.sleep(self._gc_settle_delay)
        except Exception as e:
            logger.exception("Garbage collection failed")
            record_maintenance_action("garbage_collect", "error")
            await notifier.notify_error(e)
            return

        logger.info("Garbage collection completed")
        record_maintenance_action("garbage_collect", "success")
        await notifier.notify_success(self._t(GC_SUCCESS_KEY))

    async def shrink_database(self, notifier: NotificationSink) -> None:
        """Compact database storage when the provider supports it.

        Unsupported providers (or no database at all) are left untouched and
        produce no notification.
        """
        try:
            provider = self._data_context.provider if self._data_context else None
            if provider is None or not provider.can_shrink:
                logger.info("Database shrink not supported, skipping")
                record_maintenance_action("shrink_database", "skipped")
                return

            await provider.shrink_database()
        except Exception as e:
            logger.exception("Database shrink failed")
            record_maintenance_action("shrink_database", "error")
            await notifier.notify_error(e)
            return

        record_maintenance_action("shrink_database", "success")
        await notifier.notify_success(self._t(SHRINK_SUCCESS_KEY))

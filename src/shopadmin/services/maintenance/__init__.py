"""Maintenance service package."""

from shopadmin.services.maintenance.exceptions import MaintenanceError, RestartError
from shopadmin.services.maintenance.restart import ProcessRestarter
from shopadmin.services.maintenance.service import MaintenanceService
from shopadmin.services.maintenance.system_info import SystemInfoCollector


__all__ = [
    "MaintenanceError",
    "MaintenanceService",
    "ProcessRestarter",
    "RestartError",
    "SystemInfoCollector",
]

"""Observability components: logging and metrics."""

from shopadmin.observability.logging import (
    bind_context,
    clear_context,
    get_context,
    get_logger,
    logger,
    setup_logging,
    unbind_context,
)
from shopadmin.observability.metrics import record_maintenance_action, setup_metrics


__all__ = [
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "logger",
    "record_maintenance_action",
    "setup_logging",
    "setup_metrics",
    "unbind_context",
]

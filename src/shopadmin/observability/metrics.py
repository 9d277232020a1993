"""Prometheus metrics instrumentation.

This module provides:
- FastAPI automatic request metrics
- A counter of maintenance actions by outcome
- Metrics endpoint configuration
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator, metrics

from shopadmin.core.config import get_settings
from shopadmin.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

    from shopadmin.core.config import Settings

logger = get_logger(__name__)

METRIC_NAMESPACE = "shop_admin"

MAINTENANCE_ACTIONS = Counter(
    "maintenance_actions_total",
    "Maintenance actions executed, by action and outcome",
    labelnames=("action", "outcome"),
    namespace=METRIC_NAMESPACE,
)


def record_maintenance_action(action: str, outcome: str) -> None:
    """Count one maintenance action.

    Args:
        action: Action name, e.g. "clear_cache".
        outcome: "success", "skipped" or "error".
    """
    MAINTENANCE_ACTIONS.labels(action=action, outcome=outcome).inc()


def setup_metrics(app: FastAPI, settings: Settings | None = None) -> Instrumentator:
    """Configure Prometheus HTTP instrumentation and expose ``/metrics``.

    Collects request count, size and latency histograms for
    every templated route except the probes and the metrics endpoint itself.

    Args:
        app: The FastAPI application instance.
        settings: Settings to use; defaults to the cached global settings.

    Returns:
        Configured Instrumentator instance.
    """
    if settings is None:
        settings = get_settings()

    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return Instrumentator()

    prefix = settings.api.v1_prefix

    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        excluded_handlers=[
            f"{prefix}/health",
            f"{prefix}/ready",
            f"{prefix}/metrics",
        ],
    )

    instrumentator.add(
        metrics.default(
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem="http",
            should_only_respect_2xx_for_highr=False,
        )
    )

    instrumentator.instrument(app)

    metrics_endpoint = f"{prefix}/metrics"
    instrumentator.expose(
        app,
        endpoint=metrics_endpoint,
        include_in_schema=True,
        tags=["Monitoring"],
    )

    logger.info("Prometheus metrics configured", endpoint=metrics_endpoint)

    return instrumentator


__all__ = ["MAINTENANCE_ACTIONS", "record_maintenance_action", "setup_metrics"]

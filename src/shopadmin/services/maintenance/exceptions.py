"""Maintenance service exceptions."""

from __future__ import annotations


class MaintenanceError(Exception):
    """Base exception for maintenance service errors."""


class RestartError(MaintenanceError):
    """Raised when the process restart primitive fails."""

    def __init__(self, strategy: str, reason: str) -> None:
        self.strategy = strategy
        super().__init__(f"Restart via '{strategy}' failed: {reason}")

"""Collaborators the maintenance service depends on."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ApplicationCache(Protocol):
    """Distributed application cache."""

    async def clear(self) -> int: ...


@runtime_checkable
class ScopedMemoryCache(Protocol):
    """Process-local cache addressed by scoped keys."""

    def build_scoped_key(self, key: str) -> str: ...

    def remove_by_pattern(self, pattern: str) -> int: ...


@runtime_checkable
class NotificationSink(Protocol):
    """Receives the user-visible outcome of redirecting actions."""

    async def notify_success(self, message: str) -> None: ...

    async def notify_error(self, error: BaseException | str) -> None: ...


@runtime_checkable
class Authorizer(Protocol):
    """Answers permission checks for the current viewer."""

    def has_permission(self, permission: str) -> bool: ...


@runtime_checkable
class Restarter(Protocol):
    """Restarts the whole application process."""

    def restart(self) -> None: ...

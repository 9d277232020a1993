"""FastAPI dependencies for service access.

Services are built during application startup and stored in app.state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated
from urllib.parse import urlsplit

from fastapi import Depends, HTTPException, Request, status

from shopadmin.auth.dependencies import CurrentUser, get_current_user
from shopadmin.services.notifications import FlashNotifier, FlashStore


if TYPE_CHECKING:
    from shopadmin.services.maintenance import MaintenanceService


async def get_maintenance_service(request: Request) -> MaintenanceService:
    """Get the maintenance service from app state.

    Raises:
        HTTPException: 503 if service is not initialized.
    """
    service: MaintenanceService | None = getattr(
        request.app.state, "maintenance_service", None
    )
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Maintenance service not available",
        )
    return service


async def get_flash_store(request: Request) -> FlashStore:
    """Get the flash notification store from app state.

    Raises:
        HTTPException: 503 if the store is not initialized.
    """
    store: FlashStore | None = getattr(request.app.state, "flash_store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notification store not available",
        )
    return store


async def get_notifier(
    store: Annotated[FlashStore, Depends(get_flash_store)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> FlashNotifier:
    """Notifier that queues flash messages for the current user."""
    return FlashNotifier(store, user.id)


def referrer_path(request: Request) -> str | None:
    """Path and query of the ``Referer`` header when it points at this site.

    Relative referrers are accepted as they are; absolute ones only when
    their host matches the request's host.
    """
    referer = request.headers.get("referer")
    if not referer:
        return None

    parts = urlsplit(referer)
    if parts.scheme not in ("", "http", "https"):
        return None
    if parts.netloc and parts.netloc != request.url.netloc:
        return None

    path = parts.path or "/"
    # Browsers read "//host" and "/\host" as another site
    if not path.startswith("/") or path.startswith("//") or "\\" in path:
        return None
    return f"{path}?{parts.query}" if parts.query else path

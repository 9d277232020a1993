"""Maintenance endpoints for the back-office.

Provides:
- GET/POST /admin/maintenance/restart for the two-phase application restart
- POST /admin/maintenance/cache/clear and /database-cache/clear
- GET /admin/maintenance/system-info
- GET/POST /admin/maintenance/garbage-collect and /shrink-database, which
  answer with a redirect back to the referring page and a flash notification
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request, Response, status
from fastapi.responses import RedirectResponse

from shopadmin.api.dependencies import (
    get_maintenance_service,
    get_notifier,
    referrer_path,
)
from shopadmin.auth.dependencies import CurrentUser, RequirePermissions
from shopadmin.auth.permissions import Permission
from shopadmin.core.config import get_settings
from shopadmin.observability.logging import get_logger
from shopadmin.schemas.maintenance import (
    RestartConfirmation,
    SystemInfoSnapshot,
    TaskResult,
)
from shopadmin.services.maintenance import MaintenanceService
from shopadmin.services.notifications import FlashNotifier


logger = get_logger(__name__)

router = APIRouter(prefix="/admin/maintenance", tags=["Maintenance"])

_AUTH_RESPONSES: dict[int | str, dict[str, object]] = {
    401: {
        "description": "Authentication required",
        "content": {"application/json": {"example": {"message": "Not authenticated"}}},
    },
    403: {
        "description": "Insufficient permissions",
        "content": {
            "application/json": {"example": {"message": "Insufficient permissions"}}
        },
    },
    503: {"description": "Maintenance service unavailable"},
}

ExecuteUser = Annotated[
    CurrentUser, Depends(RequirePermissions(Permission.MAINTENANCE_EXECUTE))
]
ReadUser = Annotated[CurrentUser, Depends(RequirePermissions(Permission.MAINTENANCE_READ))]
Service = Annotated[MaintenanceService, Depends(get_maintenance_service)]
Notifier = Annotated[FlashNotifier, Depends(get_notifier)]


def _redirect_back(request: Request) -> RedirectResponse:
    settings = getattr(request.app.state, "settings", None) or get_settings()
    target = referrer_path(request) or settings.maintenance.fallback_redirect_url
    return RedirectResponse(url=target, status_code=status.HTTP_303_SEE_OTHER)


@router.get(
    "/restart",
    response_model=RestartConfirmation,
    summary="Confirm application restart",
    description="Describe the restart and where to return once it is done.",
    responses=_AUTH_RESPONSES,
)
async def confirm_restart(
    request: Request,
    user: ExecuteUser,
    service: Service,
    return_url: Annotated[str | None, Query(alias="returnUrl")] = None,
) -> RestartConfirmation:
    """First phase of a restart. Nothing is restarted."""
    return service.describe_restart(return_url or referrer_path(request))


@router.post(
    "/restart",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Restart the application",
    description=(
        "Restart the whole application process. The response is sent first; "
        "all in-memory state is lost."
    ),
    responses=_AUTH_RESPONSES,
)
async def restart_application(
    background_tasks: BackgroundTasks,
    user: ExecuteUser,
    service: Service,
) -> Response:
    logger.warning("Application restart requested", user_id=user.id)
    background_tasks.add_task(service.restart_application)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/cache/clear",
    response_model=TaskResult,
    summary="Clear application caches",
    description=(
        "Clears the distributed application cache and this process's memory "
        "cache. Failures are reported as a server error."
    ),
    responses=_AUTH_RESPONSES,
)
async def clear_cache(user: ExecuteUser, service: Service) -> TaskResult:
    logger.info("Cache clear requested", user_id=user.id, user_roles=user.roles)
    return await service.clear_cache()


@router.post(
    "/database-cache/clear",
    response_model=TaskResult,
    summary="Clear the database query cache",
    description="Clears cached query results. Succeeds when no query cache is configured.",
    responses=_AUTH_RESPONSES,
)
async def clear_database_cache(user: ExecuteUser, service: Service) -> TaskResult:
    logger.info("Database cache clear requested", user_id=user.id)
    return await service.clear_database_cache()


@router.get(
    "/system-info",
    response_model=SystemInfoSnapshot,
    summary="System information",
    description=(
        "Runtime, host, memory, database and loaded module information. "
        "Values that cannot be read are left empty."
    ),
    responses=_AUTH_RESPONSES,
)
async def system_info(
    request: Request,
    user: ReadUser,
    service: Service,
) -> SystemInfoSnapshot:
    return await service.get_system_info(
        http_host=request.headers.get("host", ""),
        authorizer=user,
    )


@router.api_route(
    "/garbage-collect",
    methods=["GET", "POST"],
    status_code=status.HTTP_303_SEE_OTHER,
    response_class=RedirectResponse,
    summary="Force garbage collection",
    description="Runs a full collection, then redirects back with a notification.",
    responses=_AUTH_RESPONSES,
)
async def garbage_collect(
    request: Request,
    user: ExecuteUser,
    service: Service,
    notifier: Notifier,
) -> RedirectResponse:
    logger.info("Garbage collection requested", user_id=user.id)
    await service.garbage_collect(notifier)
    return _redirect_back(request)


@router.api_route(
    "/shrink-database",
    methods=["GET", "POST"],
    status_code=status.HTTP_303_SEE_OTHER,
    response_class=RedirectResponse,
    summary="Shrink the database",
    description=(
        "Reclaims unused database storage when the provider supports it, "
        "then redirects back with a notification."
    ),
    responses=_AUTH_RESPONSES,
)
async def shrink_database(
    request: Request,
    user: ExecuteUser,
    service: Service,
    notifier: Notifier,
) -> RedirectResponse:
    logger.info("Database shrink requested", user_id=user.id)
    await service.shrink_database(notifier)
    return _redirect_back(request)

"""Flash notification endpoint.

Returns and removes the notifications queued for the current user.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from redis.exceptions import RedisError

from shopadmin.api.dependencies import get_flash_store
from shopadmin.auth.dependencies import CurrentUser, get_current_user
from shopadmin.core.exceptions import ServiceUnavailableError
from shopadmin.observability.logging import get_logger
from shopadmin.schemas.maintenance import Notification
from shopadmin.services.notifications import FlashStore


logger = get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["Notifications"])


@router.get(
    "/notifications",
    response_model=list[Notification],
    summary="Consume pending notifications",
    description="Returns queued notifications for the caller and clears them.",
)
async def consume_notifications(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[FlashStore, Depends(get_flash_store)],
) -> list[Notification]:
    try:
        return await store.pop_all(user.id)
    except (RedisError, RuntimeError) as e:
        logger.exception("Failed to read notifications", user_id=user.id)
        msg = "Notification store is not available"
        raise ServiceUnavailableError(msg) from e

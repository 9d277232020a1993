"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under /api/v1/shop-admin/ via the v1_prefix configuration.
"""

from __future__ import annotations

from fastapi import APIRouter

from shopadmin.api.v1.endpoints import health, maintenance, notifications


router = APIRouter()

router.include_router(health.router)
router.include_router(maintenance.router)
router.include_router(notifications.router)

"""Shared test fixtures and configuration for the Shop Admin service tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest


# Load config/environments/test before anything reads settings
os.environ.setdefault("APP_ENV", "test")

from shopadmin.auth.dependencies import CurrentUser  # noqa: E402
from shopadmin.auth.permissions import Role  # noqa: E402
from shopadmin.core.config import get_settings  # noqa: E402
from shopadmin.observability.logging import clear_context  # noqa: E402


if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None]:
    """Reload settings for every test so env overrides do not leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_log_context() -> Generator[None]:
    clear_context()
    yield
    clear_context()


@pytest.fixture
def admin_user() -> CurrentUser:
    """An administrator holding every maintenance permission."""
    return CurrentUser(id="admin-user-123", roles=[Role.ADMIN.value])


@pytest.fixture
def support_user() -> CurrentUser:
    """A support user who may read but not execute maintenance actions."""
    return CurrentUser(id="support-user-456", roles=[Role.SUPPORT.value])


@pytest.fixture
def anonymous_user() -> CurrentUser:
    """An authenticated user without any maintenance permission."""
    return CurrentUser(id="plain-user-789", roles=["customer"])

"""Unit tests for SystemInfoCollector."""

from __future__ import annotations

import sys
from types import ModuleType
from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import pytest

from shopadmin.auth.dependencies import CurrentUser
from shopadmin.database.providers import DataProviderError
from shopadmin.services.maintenance import SystemInfoCollector


if TYPE_CHECKING:
    from pathlib import Path


pytestmark = pytest.mark.unit


@pytest.fixture
def collector(tmp_path: Path) -> SystemInfoCollector:
    return SystemInfoCollector(app_version="1.2.3", app_path=tmp_path)


@pytest.fixture
def admin() -> CurrentUser:
    return CurrentUser(id="admin-1", roles=["admin"])


class TestCollect:
    """Tests for SystemInfoCollector.collect."""

    async def test_basic_fields(self, collector: SystemInfoCollector) -> None:
        """Should describe the runtime without a database."""
        snapshot = await collector.collect(http_host="shop.example")

        assert snapshot.app_version == "1.2.3"
        assert snapshot.http_host == "shop.example"
        assert snapshot.runtime_version
        assert snapshot.operating_system
        assert snapshot.utc_time.utcoffset().total_seconds() == 0
        assert snapshot.app_date is not None
        assert snapshot.database_size is None
        assert snapshot.data_provider_friendly_name is None
        assert snapshot.shrink_database_enabled is False

    async def test_database_fields(
        self,
        collector: SystemInfoCollector,
        data_context: MagicMock,
        admin: CurrentUser,
    ) -> None:
        """Should report size in bytes and the engine name."""
        snapshot = await collector.collect(data_context=data_context, authorizer=admin)

        assert snapshot.database_size == round(1.5 * 1024 * 1024)
        assert snapshot.data_provider_friendly_name == "PostgreSQL"
        assert snapshot.shrink_database_enabled is True

    async def test_database_failure_leaves_size_unset(
        self,
        collector: SystemInfoCollector,
        data_context: MagicMock,
        provider: MagicMock,
        admin: CurrentUser,
    ) -> None:
        """Should keep the snapshot when the size query fails."""
        provider.get_database_size_mb.side_effect = DataProviderError("pool is closed")

        snapshot = await collector.collect(data_context=data_context, authorizer=admin)

        assert snapshot.database_size is None
        assert snapshot.data_provider_friendly_name == "PostgreSQL"
        assert snapshot.loaded_modules

    async def test_shrink_requires_provider_support(
        self,
        collector: SystemInfoCollector,
        data_context: MagicMock,
        provider: MagicMock,
        admin: CurrentUser,
    ) -> None:
        """Should disable shrinking for unsupported providers."""
        provider.can_shrink = False

        snapshot = await collector.collect(data_context=data_context, authorizer=admin)

        assert snapshot.shrink_database_enabled is False

    async def test_shrink_requires_permission(
        self,
        collector: SystemInfoCollector,
        data_context: MagicMock,
    ) -> None:
        """Should disable shrinking for viewers without maintenance access."""
        viewer = CurrentUser(id="c-1", roles=["customer"])

        snapshot = await collector.collect(data_context=data_context, authorizer=viewer)

        assert snapshot.shrink_database_enabled is False

    async def test_shrink_without_viewer(
        self,
        collector: SystemInfoCollector,
        data_context: MagicMock,
    ) -> None:
        """Should disable shrinking when nobody is known to be looking."""
        snapshot = await collector.collect(data_context=data_context)

        assert snapshot.shrink_database_enabled is False

    async def test_memory_failure_leaves_size_unset(
        self,
        collector: SystemInfoCollector,
    ) -> None:
        """Should keep the snapshot when memory info is unavailable."""
        with patch(
            "shopadmin.services.maintenance.system_info.psutil.Process",
            side_effect=PermissionError("denied"),
        ):
            snapshot = await collector.collect()

        assert snapshot.used_memory_size is None
        assert snapshot.runtime_version

    async def test_memory_size(self, collector: SystemInfoCollector) -> None:
        """Should report the process private memory."""
        process = MagicMock()
        process.memory_full_info.return_value = MagicMock(uss=4096)
        with patch(
            "shopadmin.services.maintenance.system_info.psutil.Process",
            return_value=process,
        ):
            snapshot = await collector.collect()

        assert snapshot.used_memory_size == 4096

    async def test_missing_app_path(self, tmp_path: Path) -> None:
        """Should leave the application date unset for a missing path."""
        collector = SystemInfoCollector("1.0.0", app_path=tmp_path / "missing")

        snapshot = await collector.collect()

        assert snapshot.app_date is None


class TestLoadedModules:
    """Tests for the loaded module listing."""

    async def test_lists_top_level_modules_only(
        self,
        collector: SystemInfoCollector,
    ) -> None:
        """Should list top-level modules and skip submodules."""
        snapshot = await collector.collect()
        names = [m.full_name.split(" ")[0] for m in snapshot.loaded_modules]

        assert "shopadmin" in names
        assert "sys" in names
        assert all("." not in name for name in names)

    async def test_version_and_location(self, collector: SystemInfoCollector) -> None:
        """Should include the version and file where available."""
        snapshot = await collector.collect()
        modules = {m.full_name.split(" ")[0]: m for m in snapshot.loaded_modules}

        assert modules["shopadmin"].full_name == "shopadmin 0.1.0"
        assert modules["shopadmin"].location.endswith("__init__.py")
        assert modules["sys"].location is None

    async def test_module_with_failing_attribute_lookup(
        self,
        collector: SystemInfoCollector,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Should list a module whose attribute hook raises by its bare name."""

        class LazyShim(ModuleType):
            def __getattr__(self, attr: str) -> object:
                msg = f"optional dependency for {attr} is not installed"
                raise RuntimeError(msg)

        monkeypatch.setitem(sys.modules, "lazyshim", LazyShim("lazyshim"))

        snapshot = await collector.collect()
        modules = {m.full_name: m for m in snapshot.loaded_modules}

        assert "lazyshim" in modules
        assert modules["lazyshim"].location is None
        assert snapshot.runtime_version

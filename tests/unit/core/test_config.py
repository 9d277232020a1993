"""Unit tests for application configuration.

Tests cover:
- YAML loading (base + environment overlay)
- Environment variable overrides
- Computed properties
- Enum validation
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from shopadmin.core.config import AuthMode, RestartStrategy, Settings
from shopadmin.core.config.settings import (
    AuthSettings,
    MaintenanceSettings,
    RedisSettings,
)
from shopadmin.core.config.yaml_source import (
    CONFIG_DIR_ENV_VAR,
    deep_merge,
    load_yaml_dir,
)


if TYPE_CHECKING:
    from pathlib import Path


pytestmark = pytest.mark.unit


class TestDeepMerge:
    """Tests for deep_merge helper."""

    def test_merges_nested_dicts(self) -> None:
        """Should merge nested dicts key by key."""
        base = {"redis": {"host": "localhost", "port": 6379}}
        override = {"redis": {"host": "cache.internal"}}

        result = deep_merge(base, override)

        assert result == {"redis": {"host": "cache.internal", "port": 6379}}

    def test_replaces_non_dict_values(self) -> None:
        """Should replace scalars and lists outright."""
        result = deep_merge({"origins": ["a"], "debug": False}, {"origins": ["b"]})

        assert result == {"origins": ["b"], "debug": False}

    def test_does_not_mutate_base(self) -> None:
        """Should leave the base dict untouched."""
        base = {"app": {"debug": False}}
        deep_merge(base, {"app": {"debug": True}})

        assert base == {"app": {"debug": False}}


class TestLoadYamlDir:
    """Tests for load_yaml_dir."""

    def test_returns_empty_for_missing_directory(self, tmp_path: Path) -> None:
        """Should return an empty dict when the directory does not exist."""
        assert load_yaml_dir(tmp_path / "missing") == {}

    def test_merges_files_in_name_order(self, tmp_path: Path) -> None:
        """Should merge files sorted by name, later files winning."""
        (tmp_path / "a.yaml").write_text("app:\n  name: first\n  debug: true\n")
        (tmp_path / "b.yaml").write_text("app:\n  name: second\n")

        assert load_yaml_dir(tmp_path) == {"app": {"name": "second", "debug": True}}

    def test_ignores_empty_files(self, tmp_path: Path) -> None:
        """Should treat empty YAML files as empty mappings."""
        (tmp_path / "empty.yaml").write_text("")

        assert load_yaml_dir(tmp_path) == {}


class TestSettingsSources:
    """Tests for loading Settings from YAML and the environment."""

    @pytest.fixture
    def config_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
        """Create a throwaway config directory and point settings at it."""
        base = tmp_path / "base"
        base.mkdir()
        (base / "storage.yaml").write_text(
            "redis:\n  host: base-redis\n  port: 6380\n"
            "database:\n  name: base-db\n"
        )
        env_dir = tmp_path / "environments" / "staging"
        env_dir.mkdir(parents=True)
        (env_dir / "overrides.yaml").write_text("redis:\n  host: staging-redis\n")

        monkeypatch.setenv(CONFIG_DIR_ENV_VAR, str(tmp_path))
        monkeypatch.setenv("APP_ENV", "staging")
        return tmp_path

    def test_environment_yaml_overrides_base(self, config_dir: Path) -> None:
        """Should overlay environment YAML on top of base YAML."""
        settings = Settings()

        assert settings.redis.host == "staging-redis"
        assert settings.redis.port == 6380
        assert settings.database.name == "base-db"

    def test_env_vars_override_yaml(
        self,
        config_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Should let nested env vars win over YAML values."""
        monkeypatch.setenv("REDIS__HOST", "env-redis")

        settings = Settings()

        assert settings.redis.host == "env-redis"

    def test_secrets_come_from_environment(
        self,
        config_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Should read secrets from environment variables."""
        monkeypatch.setenv("REDIS_PASSWORD", "s3cret")

        settings = Settings()

        assert settings.REDIS_PASSWORD == "s3cret"

    def test_project_test_environment_is_loaded(self) -> None:
        """Should pick up config/environments/test from the repository."""
        settings = Settings(APP_ENV="test")

        assert settings.auth_mode_enum == AuthMode.DISABLED
        assert settings.database.enabled is False
        assert settings.maintenance.gc_settle_delay == 0.0


class TestComputedProperties:
    """Tests for Settings computed properties."""

    def test_redis_url_without_auth(self) -> None:
        """Should build a URL without credentials."""
        settings = Settings(redis=RedisSettings(host="r", port=6379, cache_db=2))

        assert settings.redis_cache_url == "redis://r:6379/2"

    def test_redis_url_with_password(self) -> None:
        """Should include the password when set."""
        settings = Settings(
            REDIS_PASSWORD="pw",
            redis=RedisSettings(host="r", port=6379),
        )

        assert settings.redis_cache_url == "redis://:pw@r:6379/0"

    def test_redis_url_with_user_and_password(self) -> None:
        """Should include user and password for ACL auth."""
        settings = Settings(
            REDIS_PASSWORD="pw",
            redis=RedisSettings(host="r", port=6379, user="svc"),
        )

        assert settings.redis_cache_url == "redis://svc:pw@r:6379/0"

    def test_auth_mode_enum_is_case_insensitive(self) -> None:
        """Should parse auth mode regardless of case."""
        settings = Settings(auth=AuthSettings(mode="HEADER"))

        assert settings.auth_mode_enum == AuthMode.HEADER

    def test_invalid_auth_mode_raises(self) -> None:
        """Should raise ValueError for an unknown auth mode."""
        settings = Settings(auth=AuthSettings(mode="kerberos"))

        with pytest.raises(ValueError, match="Invalid auth mode"):
            _ = settings.auth_mode_enum

    def test_restart_strategy_enum(self) -> None:
        """Should parse the restart strategy."""
        settings = Settings(
            maintenance=MaintenanceSettings(restart_strategy="signal"),
        )

        assert settings.restart_strategy_enum == RestartStrategy.SIGNAL

    def test_invalid_restart_strategy_raises(self) -> None:
        """Should raise ValueError for an unknown restart strategy."""
        settings = Settings(
            maintenance=MaintenanceSettings(restart_strategy="reboot"),
        )

        with pytest.raises(ValueError, match="Invalid restart strategy"):
            _ = settings.restart_strategy_enum

    @pytest.mark.parametrize(
        ("app_env", "is_production", "is_non_production"),
        [
            ("production", True, False),
            ("development", False, True),
            ("test", False, True),
            ("staging", False, False),
        ],
    )
    def test_environment_helpers(
        self,
        app_env: str,
        is_production: bool,
        is_non_production: bool,
    ) -> None:
        """Should derive environment flags from APP_ENV."""
        settings = Settings(APP_ENV=app_env)

        assert settings.is_production is is_production
        assert settings.is_non_production is is_non_production

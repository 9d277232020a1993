"""Configuration module with YAML and environment variable support."""

from .settings import AuthMode, RestartStrategy, Settings, get_settings


__all__ = [
    "AuthMode",
    "RestartStrategy",
    "Settings",
    "get_settings",
]

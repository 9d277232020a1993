"""Localization of user-facing messages.

Messages are addressed by dotted resource keys (for example
``Admin.Common.TaskSuccessfullyProcessed``). Built-in English resources can
be overridden or extended per culture from a YAML file shaped like::

    en:
      Common.ShrinkDatabaseSuccessful: "Database shrunk."
    de:
      Common.ShrinkDatabaseSuccessful: "Datenbank wurde verkleinert."
"""

from __future__ import annotations

from pathlib import Path
from typing import Final

import yaml

from shopadmin.observability.logging import get_logger


logger = get_logger(__name__)

DEFAULT_CULTURE: Final[str] = "en"

DEFAULT_RESOURCES: Final[dict[str, dict[str, str]]] = {
    "en": {
        "Admin.Common.TaskSuccessfullyProcessed": "The task has been processed successfully.",
        "Admin.System.SystemInfo.GarbageCollectSuccessful": "Memory has been successfully deallocated.",
        "Admin.System.SystemInfo.RestartConfirm": "Do you really want to restart the application?",
        "Common.ShrinkDatabaseSuccessful": "The database has been shrunk successfully.",
    },
}


class Localizer:
    """Resolve resource keys to display strings for one culture.

    Lookup order is the configured culture, then English, then the key itself.
    """

    def __init__(
        self,
        culture: str = DEFAULT_CULTURE,
        resources: dict[str, dict[str, str]] | None = None,
    ) -> None:
        self.culture = culture
        self._resources: dict[str, dict[str, str]] = {
            name: dict(entries) for name, entries in DEFAULT_RESOURCES.items()
        }
        for name, entries in (resources or {}).items():
            self._resources.setdefault(name, {}).update(entries)

    @classmethod
    def from_file(cls, culture: str, path: str | Path | None) -> Localizer:
        """Build a localizer, merging resources from a YAML file when given.

        Raises:
            FileNotFoundError: If ``path`` is set but does not exist.
        """
        if path is None:
            return cls(culture)

        with Path(path).open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        resources = {
            str(name): {str(k): str(v) for k, v in (entries or {}).items()}
            for name, entries in data.items()
        }
        logger.info(
            "Loaded localization resources",
            path=str(path),
            cultures=sorted(resources),
        )
        return cls(culture, resources)

    def t(self, key: str) -> str:
        """Translate ``key``; unknown keys are returned unchanged."""
        for culture in (self.culture, DEFAULT_CULTURE):
            value = self._resources.get(culture, {}).get(key)
            if value is not None:
                return value

        logger.debug("Missing localization resource", key=key, culture=self.culture)
        return key

    __call__ = t

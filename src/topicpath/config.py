"""Configuration utilities for running topicpath on a local machine."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "TOPICPATH_HOME"
SETTINGS_KEYS = ("default_max_depth", "default_max_distance")


def _default_base_dir() -> Path:
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".topicpath"


@dataclass(slots=True)
class LocalConfig:
    """Runtime configuration for a local deployment.

    Attributes
    ----------
    base_dir:
        Root directory for the SQLite database and the settings file.
        Defaults to ``~/.topicpath`` or ``$TOPICPATH_HOME`` when set.
    database_path:
        Location of the SQLite database file. Derived from ``base_dir`` when
        not provided explicitly.
    default_max_depth:
        Hop limit used by all-paths enumeration when the caller gives none.
    default_max_distance:
        Radius used by neighbourhood searches when the caller gives none.
    """

    base_dir: Path = field(default_factory=_default_base_dir)
    database_path: Path | None = None
    default_max_depth: int = 10
    default_max_distance: float = 3.0

    def resolved_database_path(self) -> Path:
        """Return an absolute path to the SQLite database file.

        The directory is created when it does not yet exist so that the rest of
        the application can assume the path is ready for use.
        """

        target = self.database_path or self.base_dir / "topicpath.db"
        target.parent.mkdir(parents=True, exist_ok=True)
        return target.resolve()

    def settings_path(self) -> Path:
        """Return path to the settings override file."""
        return self.base_dir / "settings.json"

    def load_settings(self) -> Dict[str, Any]:
        """Load query default overrides from ``settings.json``.

        Unknown keys are ignored. A missing file yields an empty mapping; an
        unreadable one is logged and treated the same way.
        """
        settings_path = self.settings_path()
        if not settings_path.exists():
            return {}

        try:
            with open(settings_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", settings_path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: expected a JSON object", settings_path)
            return {}
        return {key: data[key] for key in SETTINGS_KEYS if key in data}

    def save_settings(self, settings: Dict[str, Any]) -> None:
        """Persist query default overrides to ``settings.json``."""
        payload = {key: settings[key] for key in SETTINGS_KEYS if key in settings}
        self.base_dir.mkdir(parents=True, exist_ok=True)
        with open(self.settings_path(), "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

    @classmethod
    def from_settings(cls, base_dir: Path | None = None) -> "LocalConfig":
        """Create a config and apply any overrides found in ``settings.json``."""
        config = cls(base_dir=base_dir) if base_dir is not None else cls()
        settings = config.load_settings()
        if "default_max_depth" in settings:
            config.default_max_depth = int(settings["default_max_depth"])
        if "default_max_distance" in settings:
            config.default_max_distance = float(settings["default_max_distance"])
        return config


DEFAULT_CONFIG = LocalConfig()

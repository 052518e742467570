"""
Snippet Designer Settings Management

This module handles loading and merging settings from .snippetdesigner/settings.json
files across different scopes (user, project, local).

Scope priority (highest to lowest):
1. Local (.snippetdesigner/settings.local.json)
2. Project (.snippetdesigner/settings.json)
3. User (~/.snippetdesigner/settings.json)
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from snippetdesigner import paths
from snippetdesigner.config import DEFAULT_REGISTRY_KEY
from snippetdesigner.path_set import AncestorMatch

logger = logging.getLogger(__name__)

SETTINGS_DIR_NAME = ".snippetdesigner"

# Default settings template
DEFAULT_SETTINGS: dict[str, Any] = {
    "host": {
        # Empty values are discovered at runtime
        "executablePath": "",
        "installDir": "",
        "userDataRoot": "",
        "uiLocale": None,
    },
    "configStore": {
        "type": "file",  # "file" | "registry" | "none"
        "path": "",
        "registryKey": DEFAULT_REGISTRY_KEY,
    },
    "ancestorMatch": "substring",  # "substring" | "segment"
}


def load_settings(path: Path) -> dict[str, Any]:
    """
    Load settings from a JSON file.

    Args:
        path: Path to the settings.json file.

    Returns:
        Parsed settings dict, or empty dict if file doesn't exist or is invalid.
    """
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
            if isinstance(data, dict):
                return dict(data)
            return {}
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to load settings from {path}: {e}")
        return {}


def merge_settings(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Merge two settings dicts, with override taking precedence.

    Performs a shallow merge at the section level (host, configStore),
    then merges keys within each section.

    Args:
        base: Base settings (lower priority).
        override: Override settings (higher priority).

    Returns:
        Merged settings dict.
    """
    result: dict[str, Any] = {}

    for key in set(base.keys()) | set(override.keys()):
        base_value = base.get(key, {})
        override_value = override.get(key, {})

        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = {**base_value, **override_value}
        elif key in override:
            result[key] = override_value
        else:
            result[key] = base_value

    return result


@dataclass
class SnippetDesignerSettings:
    """
    Snippet Designer settings container.

    Holds host overrides, the configuration store selection and the
    ancestor matching mode loaded from .snippetdesigner/settings.json files.
    """

    host: dict[str, Any] = field(default_factory=dict)
    config_store: dict[str, Any] = field(default_factory=dict)
    ancestor_match_mode: str = "substring"

    @classmethod
    def from_defaults(cls) -> "SnippetDesignerSettings":
        """Create settings with default values."""
        return cls(
            host=dict(DEFAULT_SETTINGS["host"]),
            config_store=dict(DEFAULT_SETTINGS["configStore"]),
            ancestor_match_mode=DEFAULT_SETTINGS["ancestorMatch"],
        )

    @classmethod
    def load(
        cls,
        user_path: Path | None = None,
        project_path: Path | None = None,
        local_path: Path | None = None,
    ) -> "SnippetDesignerSettings":
        """
        Load and merge settings from all scopes.

        Priority (highest to lowest):
        1. Local settings (project/.snippetdesigner/settings.local.json)
        2. Project settings (project/.snippetdesigner/settings.json)
        3. User settings (~/.snippetdesigner/settings.json)
        4. Default settings

        Args:
            user_path: Path to user settings (default: ~/.snippetdesigner/settings.json)
            project_path: Path to project settings
            local_path: Path to local settings

        Returns:
            Merged SnippetDesignerSettings instance.
        """
        if user_path is None:
            user_path = Path(paths.get_settings_dir()) / "settings.json"
        if project_path is None:
            project_path = Path.cwd() / SETTINGS_DIR_NAME / "settings.json"
        if local_path is None:
            local_path = Path.cwd() / SETTINGS_DIR_NAME / "settings.local.json"

        merged = dict(DEFAULT_SETTINGS)

        for scope, path in (
            ("user", user_path),
            ("project", project_path),
            ("local", local_path),
        ):
            scope_settings = load_settings(path)
            if scope_settings:
                merged = merge_settings(merged, scope_settings)
                logger.debug(f"Loaded {scope} settings from {path}")

        return cls(
            host=dict(merged.get("host", {})),
            config_store=dict(merged.get("configStore", {})),
            ancestor_match_mode=merged.get("ancestorMatch", "substring"),
        )

    @property
    def ancestor_match(self) -> AncestorMatch:
        """Ancestor matching mode; unknown values fall back to substring."""
        return AncestorMatch.parse(self.ancestor_match_mode)

    def get_user_data_root(self) -> str:
        """User data root from ``host.userDataRoot``, else the default location."""
        configured = self.host.get("userDataRoot")
        if configured:
            return os.path.expanduser(os.path.expandvars(str(configured)))
        return paths.get_user_data_root()

    def get_config_store_path(self) -> Path:
        """File store path from ``configStore.path``, else the default location."""
        configured = self.config_store.get("path")
        if configured:
            return Path(os.path.expanduser(os.path.expandvars(str(configured))))
        return Path(paths.get_config_store_path())


def get_settings() -> SnippetDesignerSettings:
    """
    Get the current settings, loading from all scopes.

    This is a convenience function that creates a new SnippetDesignerSettings
    instance with the default paths.

    Returns:
        SnippetDesignerSettings instance with merged settings.
    """
    return SnippetDesignerSettings.load()

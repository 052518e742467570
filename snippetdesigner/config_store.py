"""
Host Configuration Store Access

The host IDE registers snippet directories in a hierarchical key/value
store (the Windows registry on Windows hosts). This module defines the
narrow lookup contract the resolver needs and provides three backends:

- MappingConfigStore: nested dicts held in memory
- FileConfigStore: a YAML (or JSON) file with the same nested layout
- WindowsRegistryConfigStore: the real registry, Windows only

Lookups never raise. A missing or unreadable section is reported as
``None`` and a missing value list as an empty list.

Example file layout::

    Languages:
      CodeExpansions:
        CSharp:
          Paths:
            Default: "%InstallRoot%\\VC#\\Snippets\\%LCID%\\Visual C#"
          ForceCreateDirs:
            Default: "%MyDocs%\\Code Snippets\\Visual C#\\My Code Snippets"
"""

from __future__ import annotations

import logging
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

import yaml

from snippetdesigner.config import DEFAULT_REGISTRY_KEY

if TYPE_CHECKING:
    from snippetdesigner.settings import SnippetDesignerSettings

logger = logging.getLogger(__name__)

_KEY_SEPARATOR_RE = re.compile(r"[\\/]+")


def split_key_path(path: str) -> list[str]:
    """Split a ``Languages\\CodeExpansions`` style key path into names."""
    return [part for part in _KEY_SEPARATOR_RE.split(path) if part]


class ConfigStore(Protocol):
    """Lookup contract for the host configuration store."""

    def open_subsection(self, path: str, parent: Any | None = None) -> Any | None:
        """Open *path* below *parent* (or the store root); None if absent."""
        ...

    def list_subsection_names(self, handle: Any) -> list[str]:
        """Names of the sub-sections directly below *handle*."""
        ...

    def list_value_names(self, handle: Any) -> list[str]:
        """Names of the values stored directly in *handle*."""
        ...

    def get_value(self, handle: Any, name: str) -> str | None:
        """String value *name* of *handle*; None if absent or not a string."""
        ...


# ──────────────────────────────────────────────────────────
# In-memory / file-backed store
# ──────────────────────────────────────────────────────────


@dataclass
class MappingSection:
    """Handle to one section of a MappingConfigStore."""

    path: str
    entries: dict[str, Any] = field(default_factory=dict)


def _lookup(entries: dict[str, Any], name: str) -> Any | None:
    # Registry key and value names are case-insensitive
    if name in entries:
        return entries[name]
    folded = name.casefold()
    for key, value in entries.items():
        if str(key).casefold() == folded:
            return value
    return None


class MappingConfigStore:
    """Configuration store over nested dicts.

    A key whose value is a dict is a sub-section; any other key is a value.
    """

    def __init__(self, tree: dict[str, Any] | None = None) -> None:
        self._root = MappingSection("", dict(tree or {}))

    def open_subsection(
        self, path: str, parent: MappingSection | None = None
    ) -> MappingSection | None:
        section = parent if parent is not None else self._root
        for name in split_key_path(path):
            child = _lookup(section.entries, name)
            if not isinstance(child, dict):
                return None
            child_path = f"{section.path}\\{name}" if section.path else name
            section = MappingSection(child_path, child)
        return section

    def list_subsection_names(self, handle: MappingSection) -> list[str]:
        return [
            str(key) for key, value in handle.entries.items() if isinstance(value, dict)
        ]

    def list_value_names(self, handle: MappingSection) -> list[str]:
        return [
            str(key)
            for key, value in handle.entries.items()
            if not isinstance(value, dict)
        ]

    def get_value(self, handle: MappingSection, name: str) -> str | None:
        value = _lookup(handle.entries, name)
        if isinstance(value, str):
            return value
        return None


def load_store_file(path: Path) -> dict[str, Any]:
    """
    Load a configuration store tree from a YAML or JSON file.

    Args:
        path: Path to the store file.

    Returns:
        Parsed tree, or empty dict if the file is missing, unreadable or invalid.
    """
    if not path.exists():
        logger.debug(f"Config store file not found: {path}")
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError) as e:
        logger.warning(f"Failed to load config store from {path}: {e}")
        return {}

    if not isinstance(data, dict):
        if data is not None:
            logger.warning(f"Config store {path} is not a mapping, ignoring it")
        return {}
    return data


class FileConfigStore(MappingConfigStore):
    """Configuration store read once from a YAML/JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(load_store_file(self.path))


# ──────────────────────────────────────────────────────────
# Windows registry
# ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class RegistrySection:
    """Handle to a registry key, reopened on each lookup."""

    path: str


class WindowsRegistryConfigStore:
    """Configuration store backed by the Windows registry.

    Args:
        root_key_path: Key all lookups are relative to.
        hive: Name of the winreg hive constant.
    """

    def __init__(
        self,
        root_key_path: str = DEFAULT_REGISTRY_KEY,
        hive: str = "HKEY_LOCAL_MACHINE",
    ) -> None:
        if sys.platform != "win32":
            raise OSError("The Windows registry is only available on Windows")
        import winreg

        self._winreg = winreg
        self._hive = getattr(winreg, hive)
        self.root_key_path = root_key_path

    def _open(self, path: str) -> Any:
        return self._winreg.OpenKey(self._hive, path, 0, self._winreg.KEY_READ)

    def open_subsection(
        self, path: str, parent: RegistrySection | None = None
    ) -> RegistrySection | None:
        base = parent.path if parent is not None else self.root_key_path
        full_path = "\\".join([*split_key_path(base), *split_key_path(path)])
        try:
            with self._open(full_path):
                return RegistrySection(full_path)
        except OSError as e:
            logger.debug(f"Cannot open registry key {full_path}: {e}")
            return None

    def list_subsection_names(self, handle: RegistrySection) -> list[str]:
        try:
            with self._open(handle.path) as key:
                count = self._winreg.QueryInfoKey(key)[0]
                return [self._winreg.EnumKey(key, i) for i in range(count)]
        except OSError as e:
            logger.debug(f"Cannot enumerate registry key {handle.path}: {e}")
            return []

    def list_value_names(self, handle: RegistrySection) -> list[str]:
        try:
            with self._open(handle.path) as key:
                count = self._winreg.QueryInfoKey(key)[1]
                return [self._winreg.EnumValue(key, i)[0] for i in range(count)]
        except OSError as e:
            logger.debug(f"Cannot enumerate values of {handle.path}: {e}")
            return []

    def get_value(self, handle: RegistrySection, name: str) -> str | None:
        try:
            with self._open(handle.path) as key:
                value, value_type = self._winreg.QueryValueEx(key, name)
        except OSError:
            return None
        if not isinstance(value, str):
            return None
        if value_type == self._winreg.REG_EXPAND_SZ:
            return self._winreg.ExpandEnvironmentStrings(value)
        return value


def open_config_store(settings: SnippetDesignerSettings) -> ConfigStore:
    """
    Create the configuration store selected in settings.

    ``configStore.type``:
        - "file": FileConfigStore at ``configStore.path`` (default path if unset)
        - "registry": WindowsRegistryConfigStore at ``configStore.registryKey``
        - "none": empty store

    An unknown type, or the registry on a non-Windows host, falls back to
    an empty store.
    """
    store_type = str(settings.config_store.get("type", "file")).lower()

    if store_type == "file":
        return FileConfigStore(settings.get_config_store_path())

    if store_type == "registry":
        key = settings.config_store.get("registryKey") or DEFAULT_REGISTRY_KEY
        try:
            return WindowsRegistryConfigStore(key)
        except OSError as e:
            logger.warning(f"Registry config store unavailable: {e}")
            return MappingConfigStore()

    if store_type != "none":
        logger.warning(f"Unknown config store type {store_type!r}, using empty store")
    return MappingConfigStore()

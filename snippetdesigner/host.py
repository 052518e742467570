"""Facts about the host IDE: executable location, install root and UI locale."""

from __future__ import annotations

import locale
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING

from snippetdesigner.config import DEFAULT_LCID

if TYPE_CHECKING:
    from snippetdesigner.settings import SnippetDesignerSettings

logger = logging.getLogger(__name__)


def get_install_root(executable_path: str, install_dir: str) -> str:
    """Derive the installation root from the host executable path.

    The root is the path anchor plus the first two components below it,
    e.g. ``C:\\Program Files\\Microsoft Visual Studio 9.0`` for
    ``C:\\Program Files\\Microsoft Visual Studio 9.0\\Common7\\IDE\\devenv.exe``.
    Shorter paths fall back to two levels above *install_dir*.
    """
    path = PurePath(executable_path)
    components = path.parts[1:] if path.anchor else path.parts
    if len(components) >= 2:
        return str(PurePath(path.anchor, components[0], components[1]))
    return os.path.join(install_dir, os.pardir, os.pardir, "")


def current_culture_lcid() -> int:
    """Return the Windows LCID of the process locale, or en-US if unknown."""
    try:
        name = locale.getlocale()[0]
    except ValueError as e:
        # e.g. LC_CTYPE=UTF-8 on macOS
        logger.debug(f"Cannot determine process locale: {e}")
        return DEFAULT_LCID
    if not name:
        return DEFAULT_LCID

    candidates = {name, name.split(".")[0], locale.normalize(name).split(".")[0]}
    for lcid, locale_name in locale.windows_locale.items():
        if locale_name in candidates:
            return lcid
    return DEFAULT_LCID


def get_ui_locale(override: int | None = None) -> int:
    """Get the UI locale id, preferring the host's own setting."""
    if override is not None:
        return override
    return current_culture_lcid()


@dataclass(frozen=True)
class HostEnvironment:
    """Host values the directory resolver depends on."""

    executable_path: str
    install_dir: str
    user_data_root: str
    ui_locale: int | None = None

    @property
    def install_root(self) -> str:
        return get_install_root(self.executable_path, self.install_dir)

    @property
    def lcid(self) -> int:
        return get_ui_locale(self.ui_locale)

    @classmethod
    def from_settings(cls, settings: SnippetDesignerSettings) -> HostEnvironment:
        """
        Build the host environment from the ``host`` settings section.

        Unset values default to the running interpreter's executable, its
        directory, and the user data root from settings.
        """
        host = settings.host
        executable_path = host.get("executablePath") or sys.executable
        install_dir = host.get("installDir") or os.path.dirname(executable_path)

        ui_locale = host.get("uiLocale")
        if ui_locale is not None and not isinstance(ui_locale, int):
            try:
                ui_locale = int(ui_locale)
            except (TypeError, ValueError):
                logger.warning(f"Invalid uiLocale {ui_locale!r}, using process locale")
                ui_locale = None

        return cls(
            executable_path=str(executable_path),
            install_dir=str(install_dir),
            user_data_root=settings.get_user_data_root(),
            ui_locale=ui_locale,
        )

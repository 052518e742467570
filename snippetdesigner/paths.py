"""
Centralized path management for the Snippet Designer.

Provides functions to get the standard locations of the user's data root,
the configuration store file, settings and logs. All paths can be
overridden via environment variables.
"""

import os
from pathlib import Path


def _resolve_path(env_var: str, default: Path) -> str:
    """Resolve a path from an environment variable or fall back to a default.

    If the environment variable is set, its value is expanded
    (``~`` and ``$VAR`` substitution) and returned. Otherwise the
    *default* path is returned.

    Args:
        env_var: Name of the environment variable to check.
        default: Default path when the environment variable is unset.

    Returns:
        Resolved path string.
    """
    env_path = os.environ.get(env_var)
    if env_path:
        return str(Path(os.path.expanduser(os.path.expandvars(env_path))))
    return str(default)


def get_user_data_root() -> str:
    """Get the host IDE's per-user data directory.

    Override with SNIPPET_DESIGNER_USER_DATA_ROOT environment variable.
    """
    return _resolve_path(
        "SNIPPET_DESIGNER_USER_DATA_ROOT",
        Path.home() / "Documents" / "Visual Studio 2008",
    )


def get_settings_dir() -> str:
    """Get the user-scope settings directory.

    Override with SNIPPET_DESIGNER_HOME environment variable.
    """
    return _resolve_path(
        "SNIPPET_DESIGNER_HOME",
        Path.home() / ".snippetdesigner",
    )


def get_config_store_path() -> str:
    """Get the path to the file-backed configuration store.

    Override with SNIPPET_DESIGNER_CONFIG_STORE environment variable.
    """
    return _resolve_path(
        "SNIPPET_DESIGNER_CONFIG_STORE",
        Path(get_settings_dir()) / "code_expansions.yaml",
    )


def get_log_dir() -> str:
    """Get the directory for log files.

    Override with SNIPPET_DESIGNER_LOG_DIR environment variable.
    """
    return _resolve_path(
        "SNIPPET_DESIGNER_LOG_DIR",
        Path(get_settings_dir()) / "logs",
    )

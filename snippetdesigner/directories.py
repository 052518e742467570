"""
Snippet Directory Resolution

Answers two questions once per process:

- Where does the user save new snippets? One directory per language under
  the user data root, plus the snippet root itself.
- Which directories must be scanned (recursively) to find every snippet?
  The directories registered for each language in the host configuration
  store, with placeholders expanded, missing directories dropped and
  covered directories merged away.

Usage:
    from snippetdesigner.directories import (
        get_all_snippet_directories,
        get_user_snippet_directories,
    )

    for directory in get_all_snippet_directories():
        ...

Or, with an explicit context object:

    dirs = SnippetDirectories(host, store).resolve()
    dirs.all_snippet_directories
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Mapping
from enum import Enum
from types import MappingProxyType

from snippetdesigner.config import (
    CODE_EXPANSIONS_SECTION,
    FORCE_CREATE_DIRS_SECTION,
    PATHS_SECTION,
    ROOT_LABEL,
    SNIPPET_DIRECTORY_NAME,
    SNIPPET_LANGUAGES,
    SUPPORTED_STORE_KEYS,
)
from snippetdesigner.config_store import ConfigStore, open_config_store
from snippetdesigner.host import HostEnvironment
from snippetdesigner.path_set import AncestorMatch, ScanDirectorySet
from snippetdesigner.placeholders import PlaceholderResolver, build_placeholder_map
from snippetdesigner.settings import SnippetDesignerSettings, get_settings

logger = logging.getLogger(__name__)


class ResolverState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class SnippetDirectoriesNotReadyError(RuntimeError):
    """Raised when directories are read before resolution has finished."""


def build_user_snippet_directories(user_data_root: str) -> Mapping[str, str]:
    """
    Build the per-language save directories under *user_data_root*.

    Returns:
        Read-only mapping of language display name to directory, plus
        ROOT_LABEL mapped to the snippet root.
    """
    snippet_dir = os.path.join(user_data_root, SNIPPET_DIRECTORY_NAME)
    directories = {
        lang.display_name: os.path.join(
            snippet_dir, lang.directory_name, lang.my_snippets_dir
        )
        for lang in SNIPPET_LANGUAGES
    }
    directories[ROOT_LABEL] = snippet_dir
    return MappingProxyType(directories)


class SnippetDirectories:
    """
    Resolved snippet directories for one host installation.

    Construct once at startup, call ``resolve()``, then hand the instance to
    every consumer. After resolution all exposed structures are read-only.
    """

    def __init__(
        self,
        host: HostEnvironment,
        store: ConfigStore,
        *,
        match: AncestorMatch = AncestorMatch.SUBSTRING,
        exists: Callable[[str], bool] = os.path.isdir,
    ) -> None:
        self._host = host
        self._store = store
        self._match = match
        self._exists = exists
        self._state = ResolverState.UNINITIALIZED
        self._placeholders: Mapping[str, str] = MappingProxyType({})
        self._user_dirs: Mapping[str, str] = MappingProxyType({})
        self._all_dirs: tuple[str, ...] = ()

    @property
    def state(self) -> ResolverState:
        return self._state

    @property
    def placeholders(self) -> Mapping[str, str]:
        self._require_ready()
        return self._placeholders

    @property
    def user_snippet_directories(self) -> Mapping[str, str]:
        """Directories new snippets are saved to, keyed by language display name."""
        self._require_ready()
        return self._user_dirs

    @property
    def all_snippet_directories(self) -> tuple[str, ...]:
        """Directories to scan recursively for snippets."""
        self._require_ready()
        return self._all_dirs

    def _require_ready(self) -> None:
        if self._state is not ResolverState.READY:
            raise SnippetDirectoriesNotReadyError(
                f"Snippet directories are {self._state.value}, not ready"
            )

    def resolve(self) -> SnippetDirectories:
        """
        Run the single resolution pass.

        Missing configuration is tolerated: resolution always ends READY,
        possibly with fewer scan directories. Calling this again is a no-op.

        Returns:
            self, for chaining.
        """
        if self._state is not ResolverState.UNINITIALIZED:
            return self
        self._state = ResolverState.INITIALIZING

        host = self._host
        self._placeholders = build_placeholder_map(
            host.install_root, host.lcid, host.user_data_root
        )
        self._user_dirs = build_user_snippet_directories(host.user_data_root)

        scan_dirs = ScanDirectorySet(exists=self._exists, match=self._match)
        resolver = PlaceholderResolver(self._placeholders)
        self._collect_store_directories(resolver, scan_dirs)
        self._all_dirs = scan_dirs.as_tuple()

        self._state = ResolverState.READY
        logger.debug(
            f"Resolved {len(self._all_dirs)} snippet scan directories: "
            f"{list(self._all_dirs)}"
        )
        return self

    def _collect_store_directories(
        self, resolver: PlaceholderResolver, scan_dirs: ScanDirectorySet
    ) -> None:
        try:
            section = self._store.open_subsection(CODE_EXPANSIONS_SECTION)
            if section is None:
                logger.debug(f"Cannot access {CODE_EXPANSIONS_SECTION}")
                return
            language_keys = self._store.list_subsection_names(section)
        except OSError as e:
            logger.warning(f"Cannot read {CODE_EXPANSIONS_SECTION}: {e}")
            return

        for lang_key in language_keys:
            if lang_key not in SUPPORTED_STORE_KEYS:
                continue
            try:
                self._collect_language(lang_key, section, resolver, scan_dirs)
            except OSError as e:
                logger.warning(f"Cannot read snippet paths for {lang_key}: {e}")

    def _collect_language(
        self,
        lang_key: str,
        section: object,
        resolver: PlaceholderResolver,
        scan_dirs: ScanDirectorySet,
    ) -> None:
        for subsection_name in (FORCE_CREATE_DIRS_SECTION, PATHS_SECTION):
            handle = self._store.open_subsection(
                f"{lang_key}\\{subsection_name}", parent=section
            )
            if handle is None:
                logger.debug(f"Cannot find {subsection_name} for {lang_key}")
                continue

            for value_name in self._store.list_value_names(handle):
                raw = self._store.get_value(handle, value_name)
                if not raw:
                    continue
                scan_dirs.add_path_list(resolver.expand(raw))


def create_snippet_directories(
    settings: SnippetDesignerSettings | None = None,
) -> SnippetDirectories:
    """
    Build and resolve snippet directories from settings.

    Args:
        settings: Settings to use (default: loaded from all scopes).

    Returns:
        A resolved SnippetDirectories instance.
    """
    if settings is None:
        settings = get_settings()
    return SnippetDirectories(
        HostEnvironment.from_settings(settings),
        open_config_store(settings),
        match=settings.ancestor_match,
    ).resolve()


# Process-wide instance
_snippet_directories: SnippetDirectories | None = None
_snippet_directories_lock = threading.Lock()


def get_snippet_directories() -> SnippetDirectories:
    """Get the process-wide instance, resolving it on first use."""
    global _snippet_directories
    with _snippet_directories_lock:
        if _snippet_directories is None:
            _snippet_directories = create_snippet_directories()
        return _snippet_directories


def reset_snippet_directories() -> None:
    """Drop the process-wide instance so the next access resolves again."""
    global _snippet_directories
    with _snippet_directories_lock:
        _snippet_directories = None


def get_user_snippet_directories() -> Mapping[str, str]:
    """Directories new snippets are saved to, keyed by language display name."""
    return get_snippet_directories().user_snippet_directories


def get_all_snippet_directories() -> tuple[str, ...]:
    """Directories to scan recursively to discover all snippets."""
    return get_snippet_directories().all_snippet_directories

"""
Placeholder expansion for configured snippet paths.

Configured paths may contain ``%Token%`` placeholders such as
``%InstallRoot%\\VC#\\Snippets\\%LCID%``. The resolver replaces the tokens
it knows about and leaves every other ``%...%`` sequence untouched, since
unknown tokens may belong to a vendor and mean nothing here.
"""

import re
from collections.abc import Mapping
from types import MappingProxyType

INSTALL_ROOT_TOKEN = "%InstallRoot%"
LCID_TOKEN = "%LCID%"
MY_DOCS_TOKEN = "%MyDocs%"


def build_placeholder_map(
    install_root: str, lcid: int, user_data_root: str
) -> Mapping[str, str]:
    """Build the fixed, read-only placeholder map.

    Args:
        install_root: Root of the host IDE installation.
        lcid: UI locale id, stored as a decimal string.
        user_data_root: The user's IDE data directory.

    Returns:
        Read-only mapping of token to replacement value.
    """
    return MappingProxyType(
        {
            INSTALL_ROOT_TOKEN: install_root,
            LCID_TOKEN: str(lcid),
            MY_DOCS_TOKEN: user_data_root,
        }
    )


class PlaceholderResolver:
    """Expands known ``%Token%`` placeholders in path strings.

    Matching is exact and case-sensitive. The string is scanned once from
    left to right, so a replacement value is never expanded again.
    """

    def __init__(self, mapping: Mapping[str, str]) -> None:
        self._mapping = MappingProxyType(dict(mapping))
        if self._mapping:
            # Longest first so a token that prefixes another cannot shadow it
            tokens = sorted(self._mapping, key=len, reverse=True)
            self._pattern: re.Pattern[str] | None = re.compile(
                "|".join(re.escape(token) for token in tokens)
            )
        else:
            self._pattern = None

    @property
    def mapping(self) -> Mapping[str, str]:
        return self._mapping

    def expand(self, raw: str) -> str:
        """Replace every known token in *raw* with its mapped value."""
        if self._pattern is None:
            return raw
        return self._pattern.sub(lambda m: self._mapping[m.group(0)], raw)

"""Tests for snippetdesigner.placeholders module."""

import pytest

from snippetdesigner.placeholders import (
    INSTALL_ROOT_TOKEN,
    LCID_TOKEN,
    MY_DOCS_TOKEN,
    PlaceholderResolver,
    build_placeholder_map,
)


class TestBuildPlaceholderMap:
    """Test build_placeholder_map()."""

    def test_has_three_fixed_tokens(self):
        """The map holds exactly the install root, locale and docs tokens."""
        mapping = build_placeholder_map("C:\\VS", 1033, "C:\\Docs")
        assert dict(mapping) == {
            INSTALL_ROOT_TOKEN: "C:\\VS",
            LCID_TOKEN: "1033",
            MY_DOCS_TOKEN: "C:\\Docs",
        }

    def test_lcid_is_decimal_string(self):
        """The locale id is formatted in decimal."""
        mapping = build_placeholder_map("/vs", 0x0411, "/docs")
        assert mapping[LCID_TOKEN] == "1041"

    def test_map_is_read_only(self):
        """The map cannot be modified after construction."""
        mapping = build_placeholder_map("/vs", 1033, "/docs")
        with pytest.raises(TypeError):
            mapping[LCID_TOKEN] = "1031"  # type: ignore[index]


class TestPlaceholderResolver:
    """Test PlaceholderResolver.expand()."""

    @pytest.fixture
    def resolver(self) -> PlaceholderResolver:
        return PlaceholderResolver(build_placeholder_map("C:\\VS", 1033, "C:\\Docs"))

    def test_expands_known_token(self):
        """A mapped token is replaced literally."""
        resolver = PlaceholderResolver({"%InstallRoot%": "C:\\VS"})
        assert resolver.expand("%InstallRoot%\\Snippets") == "C:\\VS\\Snippets"

    def test_unknown_token_left_unchanged(self, resolver):
        """Unmapped tokens pass through verbatim."""
        assert resolver.expand("%Foo%\\Snippets") == "%Foo%\\Snippets"

    def test_multiple_distinct_tokens(self, resolver):
        """Several different tokens are expanded in one string."""
        raw = "%InstallRoot%\\VC#\\Snippets\\%LCID%;%MyDocs%\\Code Snippets"
        assert resolver.expand(raw) == (
            "C:\\VS\\VC#\\Snippets\\1033;C:\\Docs\\Code Snippets"
        )

    def test_repeated_token(self, resolver):
        """Every occurrence of a token is expanded."""
        assert resolver.expand("%LCID%\\%LCID%") == "1033\\1033"

    def test_match_is_case_sensitive(self, resolver):
        """Tokens differing in case are not recognized."""
        assert resolver.expand("%installroot%\\x") == "%installroot%\\x"

    def test_look_alike_left_unchanged(self, resolver):
        """Substrings resembling a token are not expanded."""
        assert resolver.expand("%InstallRoot\\x") == "%InstallRoot\\x"
        assert resolver.expand("InstallRoot%\\x") == "InstallRoot%\\x"

    def test_replacement_not_expanded_again(self):
        """A value containing another token is inserted literally."""
        resolver = PlaceholderResolver({"%MyDocs%": "%LCID%", "%LCID%": "1033"})
        assert resolver.expand("%MyDocs%/x") == "%LCID%/x"

    def test_string_without_tokens(self, resolver):
        """Plain strings are returned as-is."""
        assert resolver.expand("C:\\Plain\\Path") == "C:\\Plain\\Path"
        assert resolver.expand("") == ""

    def test_empty_mapping(self):
        """A resolver with no tokens returns its input."""
        resolver = PlaceholderResolver({})
        assert resolver.expand("%InstallRoot%") == "%InstallRoot%"

    def test_mapping_is_snapshot(self):
        """Changing the source dict later does not affect the resolver."""
        source = {"%LCID%": "1033"}
        resolver = PlaceholderResolver(source)
        source["%LCID%"] = "1031"
        assert resolver.expand("%LCID%") == "1033"
        assert resolver.mapping["%LCID%"] == "1033"

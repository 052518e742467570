"""Tests for snippetdesigner.paths module."""

import os
from pathlib import Path
from unittest.mock import patch

from snippetdesigner.paths import (
    get_config_store_path,
    get_log_dir,
    get_settings_dir,
    get_user_data_root,
)


class TestGetUserDataRoot:
    """Test get_user_data_root() function."""

    def test_get_user_data_root_default(self):
        """Default should be ~/Documents/Visual Studio 2008."""
        with patch.dict(os.environ, {}, clear=True):
            result = get_user_data_root()
            expected = str(Path.home() / "Documents" / "Visual Studio 2008")
            assert result == expected

    def test_get_user_data_root_env_override(self):
        """SNIPPET_DESIGNER_USER_DATA_ROOT should override default."""
        with patch.dict(
            os.environ, {"SNIPPET_DESIGNER_USER_DATA_ROOT": "/tmp/test-docs"}
        ):
            assert get_user_data_root() == "/tmp/test-docs"

    def test_get_user_data_root_expands_vars(self):
        """Environment variables inside the override are expanded."""
        with patch.dict(
            os.environ,
            {
                "SNIPPET_DESIGNER_USER_DATA_ROOT": "$DOCS_BASE/vs",
                "DOCS_BASE": "/tmp/base",
            },
        ):
            assert get_user_data_root() == str(Path("/tmp/base/vs"))


class TestSettingsDirs:
    """Test settings, config store and log directory defaults."""

    def test_get_settings_dir_default(self):
        """Default should be ~/.snippetdesigner."""
        with patch.dict(os.environ, {}, clear=True):
            assert get_settings_dir() == str(Path.home() / ".snippetdesigner")

    def test_get_config_store_path_default(self):
        """Default store file lives in the settings dir."""
        with patch.dict(os.environ, {}, clear=True):
            expected = str(Path.home() / ".snippetdesigner" / "code_expansions.yaml")
            assert get_config_store_path() == expected

    def test_get_config_store_path_follows_home_override(self):
        """SNIPPET_DESIGNER_HOME moves the default store file."""
        with patch.dict(os.environ, {"SNIPPET_DESIGNER_HOME": "/tmp/sd-home"}):
            os.environ.pop("SNIPPET_DESIGNER_CONFIG_STORE", None)
            expected = str(Path("/tmp/sd-home") / "code_expansions.yaml")
            assert get_config_store_path() == expected

    def test_get_config_store_path_env_override(self):
        """SNIPPET_DESIGNER_CONFIG_STORE should override default."""
        with patch.dict(
            os.environ, {"SNIPPET_DESIGNER_CONFIG_STORE": "/tmp/store.yaml"}
        ):
            assert get_config_store_path() == "/tmp/store.yaml"

    def test_get_log_dir_default(self):
        """Default should be ~/.snippetdesigner/logs."""
        with patch.dict(os.environ, {}, clear=True):
            assert get_log_dir() == str(Path.home() / ".snippetdesigner" / "logs")

    def test_get_log_dir_env_override(self):
        """SNIPPET_DESIGNER_LOG_DIR should override default."""
        with patch.dict(os.environ, {"SNIPPET_DESIGNER_LOG_DIR": "/tmp/sd-logs"}):
            assert get_log_dir() == "/tmp/sd-logs"

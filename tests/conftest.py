"""Pytest configuration and shared fixtures."""

import logging
import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Add snippetdesigner to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture(autouse=True)
def reset_global_state() -> Generator[None, None, None]:
    """Reset the process-wide directories instance and package logger."""
    from snippetdesigner import directories

    directories.reset_snippet_directories()

    yield

    directories.reset_snippet_directories()

    # setup_logging() detaches the package logger from the root logger,
    # which would hide records from caplog in later tests
    package_logger = logging.getLogger("snippetdesigner")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True

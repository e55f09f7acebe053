"""Shared fixtures for the httpx-restdocs test suite."""

from pathlib import Path

import pytest


@pytest.fixture
def restdocs_output_directory(tmp_path: Path) -> Path:
    """Write snippets of documented tests to a temporary directory."""
    return tmp_path / "generated-snippets"

"""Shared test fixtures for the mxidwc test suite."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def allowlist_yaml(tmp_path: Path) -> str:
    """Write a sample allow-list YAML file and return its path."""
    content = """
allowed_users:
  - "@admin:example.com"
  - "@*:example.org"
"""
    yaml_file = tmp_path / "allowlist.yaml"
    yaml_file.write_text(content)
    return str(yaml_file)

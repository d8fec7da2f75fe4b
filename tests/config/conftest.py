"""Shared fixtures for configuration tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a small mkappa.yaml config file.

    Parameters
    ----------
    tmp_path : Path
        Pytest temporary directory.

    Returns
    -------
    Path
        Path to the config file.
    """
    path = tmp_path / "mkappa.yaml"
    path.write_text(
        """
profile: dev
engine:
  default_scale: ordinal
  precision: 2
logging:
  level: WARNING
"""
    )
    return path

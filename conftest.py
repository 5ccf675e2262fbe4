"""
Repository-level pytest configuration.

Why this exists:
  - Register the STAF plugin (suite listener, --env, --run-external)
  - Keep local runs predictable: no credentials are embedded, suites run
    against in-process stubs unless --run-external is given

Important:
  Real credentials (TICTACTOE_API_KEY, TICTACTOE_BEARER_TOKEN) belong in the
  CI/CD secret store, never in config/*.yaml.
"""

from __future__ import annotations

from pathlib import Path

import pytest

pytest_plugins = ["staf.pytest_plugin", "pytester"]


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent

"""
================================================================================
Root Pytest Configuration
================================================================================

Registers the project-wide markers shared by every suite.

================================================================================
"""

from pathlib import Path

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line("markers", "smoke: Quick verification tests")
    config.addinivalue_line("markers", "regression: Full regression test suite")
    config.addinivalue_line("markers", "integration: Integration tests between components")
    config.addinivalue_line("markers", "e2e: End-to-end game and search flows")
    config.addinivalue_line("markers", "api: API-specific tests")
    config.addinivalue_line("markers", "mutation: Mutation/negative tests")
    config.addinivalue_line("markers", "unit: Framework unit tests")

    # Domain markers
    config.addinivalue_line("markers", "board: Tic-tac-toe board endpoint")
    config.addinivalue_line("markers", "square: Tic-tac-toe square endpoint")
    config.addinivalue_line("markers", "placement: Tic-tac-toe mark placement")
    config.addinivalue_line("markers", "dataset: USPTO dataset metadata endpoints")
    config.addinivalue_line("markers", "search: USPTO record search")
    config.addinivalue_line("markers", "pet: Petstore pet endpoints")


def pytest_collection_modifyitems(config, items):
    """Auto-add the unit marker to framework unit tests."""
    for item in items:
        if "unit" in Path(str(item.fspath)).parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "STAF - Simple Test Automation Framework",
        "=" * 60,
        "",
    ]

"""
================================================================================
STAF Pytest Plugin
================================================================================

Test lifecycle listeners and shared options for every STAF suite.

Features:
    - Suite lifecycle logging (---> TEST SUITE [name] STARTED --->)
    - Per-test STARTED / SUCCESSFULLY FINISHED / FAILED / SKIPPED logging
    - Access to the running test item from framework code
    - --env selection exported to STAF_ENV for ConfigLoader
    - --run-external gate for tests hitting live services
    - Retry of failed tests (@pytest.mark.retry or --retries N)

Registration:
    # conftest.py
    pytest_plugins = ["staf.pytest_plugin"]

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import threading
from typing import List, Optional

import pytest
from _pytest.runner import runtestprotocol
from loguru import logger

from .common import get_config, init_logger
from .common.config_loader import DEFAULT_ENV, ENV_VARIABLE, ConfigLoader


RUN_EXTERNAL_VARIABLE = "STAF_RUN_EXTERNAL"
DEFAULT_SUITE_NAME = "STAF"
DEFAULT_MAX_RETRY_ATTEMPTS = 2

_TRUE_VALUES = ("true", "1", "yes", "on")

_capture = threading.local()


# =============================================================================
# Method Capture
# =============================================================================

def current_test_item() -> pytest.Item:
    """
    Return the pytest item currently running on this thread.

    Raises:
        RuntimeError: When called outside a running test
    """
    item = getattr(_capture, "item", None)
    if item is None:
        raise RuntimeError(
            "No test is currently running. "
            "Did you forget to register the staf.pytest_plugin plugin?"
        )
    return item


def external_runs_enabled(config: pytest.Config) -> bool:
    """True when tests against live services are allowed."""
    if config.getoption("run_external", default=False):
        return True
    return os.environ.get(RUN_EXTERNAL_VARIABLE, "").lower() in _TRUE_VALUES


def max_retry_attempts(item: pytest.Item) -> int:
    """
    Number of extra runs a failed test gets.

    A `retry` marker wins; its `max_attempts` defaults to the
    `test.retry.max_attempts` setting. Unmarked tests use --retries.
    """
    marker = item.get_closest_marker("retry")
    if marker is not None:
        attempts = marker.kwargs.get(
            "max_attempts",
            get_config("test.retry.max_attempts", DEFAULT_MAX_RETRY_ATTEMPTS),
        )
    else:
        attempts = item.config.getoption("staf_retries", default=0)
    try:
        return max(int(attempts), 0)
    except (TypeError, ValueError):
        raise pytest.UsageError(f"Retry attempts must be an integer, got {attempts!r}") from None


# =============================================================================
# Options and Configuration
# =============================================================================

def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("staf", "STAF test automation")
    group.addoption(
        "--env",
        action="store",
        dest="staf_env",
        default=os.environ.get(ENV_VARIABLE, DEFAULT_ENV),
        help=f"Configuration profile (config/<env>.yaml). Default: ${ENV_VARIABLE} or {DEFAULT_ENV}",
    )
    group.addoption(
        "--suite-name",
        action="store",
        dest="staf_suite_name",
        default=DEFAULT_SUITE_NAME,
        help="Suite name used in lifecycle logs",
    )
    group.addoption(
        "--run-external",
        action="store_true",
        dest="run_external",
        default=False,
        help=f"Run tests against live services (also ${RUN_EXTERNAL_VARIABLE}=true)",
    )
    group.addoption(
        "--retries",
        action="store",
        type=int,
        dest="staf_retries",
        default=0,
        help="Re-run failed tests up to N times (tests marked retry use their own count)",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register markers, select the environment and set up logging."""
    config.addinivalue_line(
        "markers",
        "requires_external: Tests requiring live external services (see --run-external)",
    )
    config.addinivalue_line(
        "markers",
        "retry(max_attempts=None): Re-run the test when it fails "
        "(default: test.retry.max_attempts)",
    )

    env = config.getoption("staf_env")
    if os.environ.get(ENV_VARIABLE) != env:
        os.environ[ENV_VARIABLE] = env
        ConfigLoader.reset()

    init_logger()

    if not config.pluginmanager.has_plugin("staf-retry"):
        config.pluginmanager.register(RetryRunner(), "staf-retry")


def pytest_collection_modifyitems(config: pytest.Config, items) -> None:
    if external_runs_enabled(config):
        return
    skip_external = pytest.mark.skip(
        reason=f"Live service test; use --run-external or {RUN_EXTERNAL_VARIABLE}=true"
    )
    for item in items:
        if "requires_external" in item.keywords:
            item.add_marker(skip_external)


# =============================================================================
# Suite Listener
# =============================================================================

def _suite_name(session: pytest.Session) -> str:
    return session.config.getoption("staf_suite_name", default=DEFAULT_SUITE_NAME)


def pytest_sessionstart(session: pytest.Session) -> None:
    logger.info(
        f"---> TEST SUITE [{_suite_name(session)}] STARTED "
        f"(env={os.environ.get(ENV_VARIABLE, DEFAULT_ENV)}) --->"
    )


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    logger.info(
        f"<--- TEST SUITE [{_suite_name(session)}] FINISHED "
        f"(exit status {int(exitstatus)}) <---"
    )


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_protocol(item: pytest.Item, nextitem: Optional[pytest.Item]):
    _capture.item = item
    logger.info(f"---> TEST [{item.nodeid}] STARTED")
    try:
        yield
    finally:
        _capture.item = None


class RetryRunner:
    """Runs each test, repeating it while it fails and attempts remain."""

    @pytest.hookimpl(tryfirst=True)
    def pytest_runtest_protocol(self, item: pytest.Item, nextitem: Optional[pytest.Item]):
        attempts = max_retry_attempts(item)
        if attempts == 0:
            return None

        item.ihook.pytest_runtest_logstart(nodeid=item.nodeid, location=item.location)
        reports = _run_with_retries(item, nextitem, attempts)
        for report in reports:
            item.ihook.pytest_runtest_logreport(report=report)
        item.ihook.pytest_runtest_logfinish(nodeid=item.nodeid, location=item.location)
        return True


def _run_with_retries(
    item: pytest.Item, nextitem: Optional[pytest.Item], attempts: int
) -> List[pytest.TestReport]:
    attempt = 0
    while True:
        reports = runtestprotocol(item, nextitem=nextitem, log=False)
        if not any(report.failed for report in reports) or attempt >= attempts:
            return reports
        attempt += 1
        logger.warning(f"Retrying test '{item.name}' - Attempt {attempt} of {attempts}")


def pytest_runtest_logreport(report: pytest.TestReport) -> None:
    if report.skipped:
        logger.warning(f"TEST [{report.nodeid}] SKIPPED")
    elif report.failed:
        logger.error(f"TEST [{report.nodeid}] FAILED during {report.when}")
    elif report.when == "call":
        logger.info(f"TEST [{report.nodeid}] SUCCESSFULLY FINISHED")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def staf_env(pytestconfig: pytest.Config) -> str:
    """Active configuration profile name."""
    return pytestconfig.getoption("staf_env")


@pytest.fixture(scope="session")
def run_external(pytestconfig: pytest.Config) -> bool:
    """Whether suites should talk to live services instead of stubs."""
    return external_runs_enabled(pytestconfig)


__all__ = [
    "current_test_item",
    "external_runs_enabled",
    "max_retry_attempts",
    "RetryRunner",
    "RUN_EXTERNAL_VARIABLE",
]

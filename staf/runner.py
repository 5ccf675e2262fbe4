"""
================================================================================
STAF Suite Runner
================================================================================

Unified entry point for executing test suites with pytest and producing the
Allure HTML report afterwards.

Features:
    - Built-in suites (unit, tictactoe, uspto, petstore, all)
    - YAML suite definition files (paths, markers, parallelism, external runs)
    - Environment profile selection (--env, exported as STAF_ENV)
    - Parallel execution through pytest-xdist
    - Retry of failed tests (--retries)
    - Allure report generation with a "latest" link

Usage:
    staf-run --suite tictactoe --env qa
    staf-run --suite-file testsuites/uspto/suite.yaml --run-external
    python run_tests.py --suite all --tags P0 smoke --parallel 4

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import argparse
import os
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from loguru import logger

from .common.config_loader import DEFAULT_ENV, ENV_VARIABLE
from .errors import SuiteDefinitionError
from .pytest_plugin import RUN_EXTERNAL_VARIABLE


ROOT_DIR = Path(__file__).resolve().parent.parent

_BOOLEAN_WORDS = {
    "true": True, "yes": True, "on": True, "1": True,
    "false": False, "no": False, "off": False, "0": False,
}


@dataclass
class SuiteDefinition:
    """
    Named selection of tests.

    Attributes:
        name: Suite name shown in lifecycle logs
        paths: Test paths relative to the repository root
        markers: Marker names; tests matching any of them are selected
        parallel: Number of pytest-xdist workers (1 = sequential)
        run_external: Run tests against live services
    """
    name: str
    paths: List[str] = field(default_factory=lambda: ["testsuites/"])
    markers: List[str] = field(default_factory=list)
    parallel: int = 1
    run_external: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str = "<dict>") -> "SuiteDefinition":
        if not isinstance(data, dict):
            raise SuiteDefinitionError(f"Suite definition {source} must be a mapping")

        name = data.get("name")
        if not name or not isinstance(name, str):
            raise SuiteDefinitionError(f"Suite definition {source} needs a 'name'")

        paths = data.get("paths", ["testsuites/"])
        if isinstance(paths, str):
            paths = [paths]
        if not isinstance(paths, list) or not paths:
            raise SuiteDefinitionError(f"Suite '{name}': 'paths' must be a non-empty list")

        markers = data.get("markers") or []
        if isinstance(markers, str):
            markers = [markers]
        if not isinstance(markers, list):
            raise SuiteDefinitionError(f"Suite '{name}': 'markers' must be a list")

        try:
            parallel = int(data.get("parallel", 1))
        except (TypeError, ValueError):
            raise SuiteDefinitionError(
                f"Suite '{name}': 'parallel' must be an integer"
            ) from None
        if parallel < 1:
            raise SuiteDefinitionError(f"Suite '{name}': 'parallel' must be at least 1")

        run_external = data.get("run_external", False)
        if isinstance(run_external, str) and run_external.lower() in _BOOLEAN_WORDS:
            run_external = _BOOLEAN_WORDS[run_external.lower()]
        if not isinstance(run_external, bool):
            raise SuiteDefinitionError(
                f"Suite '{name}': 'run_external' must be a boolean, got {run_external!r}"
            )

        return cls(
            name=name,
            paths=[str(p) for p in paths],
            markers=[str(m) for m in markers],
            parallel=parallel,
            run_external=run_external,
        )


BUILTIN_SUITES: Dict[str, SuiteDefinition] = {
    "unit": SuiteDefinition(name="unit", paths=["testsuites/unit"]),
    "tictactoe": SuiteDefinition(name="tictactoe", paths=["testsuites/tictactoe/tests"]),
    "uspto": SuiteDefinition(name="uspto", paths=["testsuites/uspto/tests"]),
    "petstore": SuiteDefinition(name="petstore", paths=["testsuites/petstore/tests"]),
    "all": SuiteDefinition(name="all", paths=["testsuites/"]),
}


def load_suite_file(path: Any) -> SuiteDefinition:
    """
    Load a suite definition from YAML.

    Raises:
        SuiteDefinitionError: When the file is missing or malformed
    """
    path = Path(path)
    if not path.exists():
        raise SuiteDefinitionError(f"Suite file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SuiteDefinitionError(f"Invalid YAML in suite file {path}: {e}") from e

    suite = SuiteDefinition.from_dict(data, source=str(path))
    logger.debug(f"Loaded suite '{suite.name}' from {path}")
    return suite


def get_suite(name: str) -> SuiteDefinition:
    try:
        return BUILTIN_SUITES[name]
    except KeyError:
        allowed = ", ".join(BUILTIN_SUITES)
        raise SuiteDefinitionError(f"Unknown suite '{name}'. Allowed: {allowed}") from None


class TestRunner:
    """
    Orchestrates one test run.

    This class handles:
    - Suite selection and pytest command building
    - Environment profile export
    - Parallel execution configuration
    - Allure report generation
    """

    __test__ = False

    def __init__(
        self,
        suite: SuiteDefinition,
        env: str = DEFAULT_ENV,
        tags: Optional[List[str]] = None,
        parallel: Optional[int] = None,
        allure_report: bool = True,
        verbose: bool = False,
        run_external: Optional[bool] = None,
        retries: int = 0,
        root_dir: Optional[Path] = None,
    ):
        """
        Initialize test runner.

        Args:
            suite: Suite to run
            env: Configuration profile name
            tags: Extra pytest markers (combined with the suite markers)
            parallel: Worker count, overrides the suite value
            allure_report: Collect results and generate the Allure report
            verbose: Enable verbose pytest output
            run_external: Overrides the suite's run_external flag
            retries: Re-run failed tests up to this many times
            root_dir: Repository root the pytest command runs in
        """
        self.suite = suite
        self.env = env
        self.tags = list(suite.markers) + list(tags or [])
        self.parallel = parallel if parallel is not None else suite.parallel
        self.allure_report = allure_report
        self.verbose = verbose
        self.run_external = suite.run_external if run_external is None else run_external
        self.retries = retries

        self.root_dir = Path(root_dir) if root_dir else ROOT_DIR
        self.reports_dir = self.root_dir / "reports"
        self.allure_results = self.reports_dir / "allure-results"
        self.allure_report_dir = self.reports_dir / "allure-report"

    def run(self) -> int:
        """
        Execute the test run.

        Returns:
            pytest exit code (0 for success)
        """
        logger.info("=" * 60)
        logger.info(f"Starting Test Execution: {self.suite.name}")
        logger.info("=" * 60)
        logger.info(f"Environment: {self.env}")
        logger.info(f"Paths: {' '.join(self.suite.paths)}")
        logger.info(f"Tags: {self.tags or 'All'}")
        logger.info(f"Parallel Workers: {self.parallel}")
        logger.info(f"External services: {'yes' if self.run_external else 'no (stubs)'}")
        logger.info("=" * 60)

        self._prepare_environment()
        cmd = self.build_pytest_command()
        logger.info(f"Executing: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, cwd=str(self.root_dir), env=self.build_environment())
            exit_code = result.returncode
        except OSError as e:
            logger.error(f"Test execution failed: {e}")
            exit_code = 1

        if self.allure_report:
            self._generate_allure_report()

        self._print_summary(exit_code)
        return exit_code

    def _prepare_environment(self) -> None:
        if self.allure_report:
            self.allure_results.mkdir(parents=True, exist_ok=True)
        logger.debug("Environment prepared")

    def build_environment(self) -> Dict[str, str]:
        """Process environment for the pytest subprocess."""
        env = dict(os.environ)
        env[ENV_VARIABLE] = self.env
        if self.run_external:
            env[RUN_EXTERNAL_VARIABLE] = "true"
        return env

    def build_pytest_command(self) -> List[str]:
        """Build the pytest command with all options."""
        cmd = [sys.executable, "-m", "pytest"]
        cmd.extend(self.suite.paths)

        cmd.extend(["--env", self.env, "--suite-name", self.suite.name])

        if self.tags:
            cmd.extend(["-m", " or ".join(self.tags)])

        if self.parallel > 1:
            cmd.extend(["-n", str(self.parallel)])

        if self.run_external:
            cmd.append("--run-external")

        if self.retries > 0:
            cmd.extend(["--retries", str(self.retries)])

        if self.allure_report:
            cmd.extend(["--alluredir", str(self.allure_results)])

        cmd.append("-v" if self.verbose else "-q")
        return cmd

    def _generate_allure_report(self) -> Optional[Path]:
        """Generate Allure HTML report and point the latest link at it."""
        logger.info("Generating Allure report...")

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        report_path = self.reports_dir / f"allure-report-{timestamp}"

        try:
            subprocess.run(
                ["allure", "generate", str(self.allure_results), "-o", str(report_path), "--clean"],
                check=True,
            )
        except FileNotFoundError:
            logger.warning("Allure CLI not found. Please install Allure to generate reports.")
            return None
        except subprocess.CalledProcessError as e:
            logger.error(f"Failed to generate Allure report: {e}")
            return None

        latest_link = self.allure_report_dir
        if latest_link.is_symlink():
            latest_link.unlink()
        elif latest_link.exists():
            shutil.rmtree(latest_link)
        latest_link.symlink_to(report_path.name)

        logger.info(f"Report generated: {report_path}")
        logger.info(f"Latest report: {latest_link}")
        return report_path

    def _print_summary(self, exit_code: int) -> None:
        logger.info("=" * 60)
        if exit_code == 0:
            logger.info("✅ TEST EXECUTION COMPLETED SUCCESSFULLY")
        else:
            logger.error(f"❌ TEST EXECUTION FAILED (exit code: {exit_code})")

        if self.allure_report:
            logger.info(f"📊 Report available at: {self.allure_report_dir}")
        logger.info("=" * 60)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="staf-run",
        description="STAF Test Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the tic-tac-toe suite against the offline stub
  staf-run --suite tictactoe

  # Run a suite file against live services with the qa profile
  staf-run --suite-file testsuites/uspto/suite.yaml --env qa --run-external

  # Run P0 smoke tests in parallel without a report
  staf-run --suite all --tags P0 smoke --parallel 4 --no-allure
        """,
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--suite",
        choices=sorted(BUILTIN_SUITES),
        default="all",
        help="Built-in suite to run (default: all)",
    )
    source.add_argument(
        "--suite-file",
        help="YAML suite definition file",
    )
    parser.add_argument(
        "--env",
        default=os.environ.get(ENV_VARIABLE, DEFAULT_ENV),
        help=f"Configuration profile (default: ${ENV_VARIABLE} or {DEFAULT_ENV})",
    )
    parser.add_argument(
        "--tags",
        nargs="+",
        default=[],
        help="Pytest markers to filter tests (e.g., P0 smoke regression)",
    )
    parser.add_argument(
        "--parallel", "-n",
        type=int,
        default=None,
        help="Number of parallel workers (default: from suite, usually 1)",
    )
    parser.add_argument(
        "--run-external",
        action="store_true",
        default=None,
        help="Run against live services instead of in-process stubs",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=0,
        help="Re-run failed tests up to N times (default: 0)",
    )
    parser.add_argument(
        "--no-allure",
        action="store_true",
        help="Disable Allure result collection and report generation",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logger.remove()
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
        level="DEBUG" if args.verbose else "INFO",
    )

    try:
        suite = load_suite_file(args.suite_file) if args.suite_file else get_suite(args.suite)
    except SuiteDefinitionError as e:
        logger.error(str(e))
        return 2

    runner = TestRunner(
        suite=suite,
        env=args.env,
        tags=args.tags,
        parallel=args.parallel,
        allure_report=not args.no_allure,
        verbose=args.verbose,
        run_external=args.run_external,
        retries=args.retries,
    )
    return runner.run()


__all__ = [
    "BUILTIN_SUITES",
    "SuiteDefinition",
    "TestRunner",
    "get_suite",
    "load_suite_file",
    "main",
]

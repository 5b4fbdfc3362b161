"""Run the behave suite in a child process and build its report."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from collections.abc import Callable, Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

from fashionhub_e2e.config import Environment, is_valid_environment
from fashionhub_e2e.constants import (
    JSON_REPORTS_DIR,
    SCREENSHOTS_DIR,
    VIDEOS_DIR,
)
from fashionhub_e2e.core.session import is_ci_mode
from fashionhub_e2e.core.signals import set_shutdown_callback
from fashionhub_e2e.reporting.html import (
    ReportGenerationError,
    ReportGenerator,
    report_base_name,
)

logger = logging.getLogger(__name__)

FEATURES_DIR = "features"


class TestRunner:
    """Build the behave command line, run it and generate the HTML report.

    Parameters
    ----------
    environment : str
        Target environment (local, staging or production)
    tags : str | None
        Tag expression forwarded to behave
    report : bool
        Write a JSON report and render it; always on in CI
    environ : Mapping[str, str] | None
        Environment of the current process, defaults to ``os.environ``
    popen_factory : Callable[..., Any] | None
        Replacement for ``subprocess.Popen`` in tests
    report_generator_factory : Callable[[], ReportGenerator] | None
        Factory for the report generator
    clock : Callable[[], datetime] | None
        Local time source used for the report name

    Raises
    ------
    ValueError
        If the environment is not one of the valid environments
    """

    __test__ = False

    def __init__(
        self,
        environment: str = Environment.PRODUCTION.value,
        tags: str | None = None,
        report: bool = False,
        environ: Mapping[str, str] | None = None,
        popen_factory: Callable[..., Any] | None = None,
        report_generator_factory: Callable[[], ReportGenerator] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not is_valid_environment(environment):
            raise ValueError(f"Invalid environment: {environment}")

        self.environment = environment
        self.tags = tags or None
        self.environ = dict(os.environ if environ is None else environ)
        self.ci_mode = is_ci_mode(self.environ)
        self.report = report or self.ci_mode
        self._popen_factory = popen_factory or subprocess.Popen
        self._report_generator_factory = report_generator_factory or (
            lambda: ReportGenerator(environment=self.environment)
        )
        self._clock = clock or datetime.now
        self._process: Any = None
        self.json_report_path: Path | None = None

    def build_command(self) -> list[str]:
        """Assemble the behave command line.

        Returns
        -------
        list[str]
            Command running behave with progress output, the optional tag
            filter and, when reporting, a JSON formatter writing to
            ``reports/json/<report name>.json``
        """
        cmd = [sys.executable, "-m", "behave", FEATURES_DIR]

        if self.tags:
            cmd.extend(["--tags", self.tags])

        cmd.extend(["--format", "progress"])
        if self.report:
            base_name = report_base_name(self.environment, self.tags, self._clock())
            self.json_report_path = JSON_REPORTS_DIR / f"{base_name}.json"
            cmd.extend(["--outfile", "-"])
            cmd.extend(["--format", "json", "--outfile", str(self.json_report_path)])

        return cmd

    def child_environment(self) -> dict[str, str]:
        env = dict(self.environ)
        env["ENV_VARS"] = self.environment
        return env

    def kill_child(self) -> None:
        """Kill the behave process if it is still running."""
        process = self._process
        if process is not None and process.poll() is None:
            logger.warning("Killing behave process %s", process.pid)
            process.kill()

    def run(self) -> int:
        """Run behave and return its exit code.

        Returns
        -------
        int
            Exit code of the behave process

        Raises
        ------
        ReportGenerationError
            If the HTML report cannot be generated outside CI
        OSError
            If the behave process cannot be started
        """
        logger.info("Running tests in %s environment...", self.environment.upper())
        if self.tags:
            logger.info("Filtering tests with tags: %s", self.tags)
        else:
            logger.info("Running all tests (no tag filter)")

        cmd = self.build_command()
        if self.json_report_path is not None:
            self.json_report_path.parent.mkdir(parents=True, exist_ok=True)
            logger.info("JSON Report: %s", self.json_report_path)
        else:
            logger.info("No report generation requested")

        logger.debug("Executing: %s", " ".join(cmd))

        set_shutdown_callback(self.kill_child)
        try:
            self._process = self._popen_factory(cmd, env=self.child_environment())
            logger.info("behave process started successfully")
            exit_code = self._process.wait()
        finally:
            self._process = None
            set_shutdown_callback(None)

        test_type = f"Tagged tests ({self.tags})" if self.tags else "All tests"
        logger.info("%s completed with exit code: %s", test_type, exit_code)

        if self.report:
            self.generate_report()

        if not self.ci_mode:
            logger.info("Videos saved in: %s/", VIDEOS_DIR)
            logger.info("Screenshots saved in: %s/", SCREENSHOTS_DIR)

        return exit_code

    def generate_report(self) -> Path | None:
        """Render the newest JSON report, tolerating failure in CI.

        Returns
        -------
        Path | None
            Main report page, or None when generation failed in CI
        """
        logger.info("Generating HTML report...")
        try:
            return self._report_generator_factory().generate()
        except ReportGenerationError as e:
            logger.error("Failed to generate report: %s", e)
            if self.ci_mode:
                logger.info("Continuing in CI mode...")
                return None
            raise

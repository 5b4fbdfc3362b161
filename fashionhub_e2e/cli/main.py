"""CLI entry point for the FashionHub E2E suite."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import fire

from fashionhub_e2e.cli.runner import TestRunner
from fashionhub_e2e.config import VALID_ENVIRONMENTS, Environment, load_dotenv_file
from fashionhub_e2e.core.signals import setup_signal_handlers
from fashionhub_e2e.logging import configure_logging
from fashionhub_e2e.reporting import ArtifactCleaner, ReportGenerationError, ReportGenerator


def is_debug_mode() -> bool:
    return os.environ.get("FASHIONHUB_DEBUG") == "1"


class FashionHubCLI:
    """Run the end-to-end suite, render reports and clean artifacts."""

    def run(
        self,
        environment: str = Environment.PRODUCTION.value,
        tags: str | None = None,
        report: bool = False,
    ) -> None:
        """Run the behave features against an environment.

        Parameters
        ----------
        environment : str
            One of local, staging or production
        tags : str | None
            Tag expression such as ``@login``
        report : bool
            Write a JSON report and render it as HTML (always on in CI)
        """
        runner = TestRunner(environment=environment, tags=tags, report=report)
        setup_signal_handlers(runner.kill_child)
        sys.exit(runner.run())

    def report(self) -> str:
        """Render the newest JSON report as HTML and return its path."""
        return str(ReportGenerator().generate())

    def clean(
        self,
        videos_only: bool = False,
        screenshots_only: bool = False,
        reports_only: bool = False,
        keep_last: int | None = None,
    ) -> None:
        """Delete videos, screenshots, reports and logs.

        Parameters
        ----------
        videos_only : bool
            Only delete videos
        screenshots_only : bool
            Only delete screenshots
        reports_only : bool
            Only delete JSON and HTML reports
        keep_last : int | None
            Keep the N newest JSON reports
        """
        ArtifactCleaner().clean(
            videos_only=videos_only,
            screenshots_only=screenshots_only,
            reports_only=reports_only,
            keep_last=keep_last,
        )

    def clean_reports(self, kind: str | None = None) -> None:
        """Empty reports/json and reports/html, or just one of them."""
        ArtifactCleaner().clean_reports(kind)

    def environments(self) -> list[str]:
        """List the valid environments."""
        return list(VALID_ENVIRONMENTS)


def handle_value_error(error: ValueError, debug_mode: bool) -> None:
    """Report a configuration error and exit with code 2.

    Parameters
    ----------
    error : ValueError
        The configuration error
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ValueError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise error

    print(f"Configuration error: {error}", file=sys.stderr)
    if "Invalid environment" in str(error):
        print(f"Valid environments: {', '.join(VALID_ENVIRONMENTS)}", file=sys.stderr)
    sys.exit(2)


def handle_report_error(error: ReportGenerationError, debug_mode: bool) -> None:
    if debug_mode:
        raise error

    print(f"Failed to generate report: {error}", file=sys.stderr)
    sys.exit(1)


def handle_runtime_error(error: RuntimeError, debug_mode: bool) -> None:
    """Report an unexpected runtime error, such as an unreadable config file.

    Parameters
    ----------
    error : RuntimeError
        The runtime error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    RuntimeError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise error

    print(f"Unexpected error: {error}", file=sys.stderr)
    sys.exit(1)


def handle_os_error(error: OSError, debug_mode: bool) -> None:
    """Report a filesystem or process start failure and exit with code 1."""
    if debug_mode:
        raise error

    print(f"Unexpected error: {error}", file=sys.stderr)
    sys.exit(1)


def main() -> None:
    """Entry point for the Fire CLI.

    Logging goes to the console and ``test-results/``; ``.env`` is loaded
    before any command runs. Set FASHIONHUB_DEBUG=1 to see tracebacks instead
    of the short error messages.
    """
    configure_logging()
    load_dotenv_file(Path.cwd() / ".env")

    debug_mode = is_debug_mode()

    try:
        fire.Fire(FashionHubCLI)
    except ValueError as e:
        handle_value_error(e, debug_mode)
    except ReportGenerationError as e:
        handle_report_error(e, debug_mode)
    except OSError as e:
        handle_os_error(e, debug_mode)
    except RuntimeError as e:
        handle_runtime_error(e, debug_mode)

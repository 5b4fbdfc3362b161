"""Scenario lifecycle: browser sessions, outcome handling and artifacts.

The behave hooks in ``features/environment.py`` delegate here. For every
scenario the controller opens a browser session, counts steps, and at the end
classifies the outcome, records failures, captures a screenshot on failure,
closes the session and only then keeps or discards the video.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from fashionhub_e2e.constants import CLEANUP_TIMEOUT_SECONDS, SEPARATOR_WIDTH
from fashionhub_e2e.core.aggregator import OutcomeRecord, RunContext, RunSummary
from fashionhub_e2e.core.outcome import Outcome, classify
from fashionhub_e2e.core.retention import ArtifactRetentionPolicy, Reporter
from fashionhub_e2e.core.session import SessionHandle, SessionManager
from fashionhub_e2e.core.timeouts import TimeoutBudget
from fashionhub_e2e.utils import format_duration, utc_now

logger = logging.getLogger(__name__)

ERROR_STATUSES = frozenset({"error", "hook_error"})


class ScenarioState(Enum):
    """Lifecycle states of a single scenario."""

    NOT_STARTED = "not_started"
    SESSION_OPEN = "session_open"
    STEPS_RUNNING = "steps_running"
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    UNKNOWN = "unknown"
    SESSION_CLOSED = "session_closed"
    ARTIFACTS_HANDLED = "artifacts_handled"
    DONE = "done"


@dataclass
class ScenarioContext:
    """Mutable state of one scenario execution."""

    name: str
    feature: str = "Unknown Feature"
    step_number: int = 0
    passed: bool = False
    session: SessionHandle | None = None
    video_path: Path | None = None
    started_at: datetime = field(default_factory=utc_now)
    state: ScenarioState = ScenarioState.NOT_STARTED

    @property
    def page(self) -> Any:
        """Playwright page of the open session, or None."""
        return self.session.page if self.session is not None else None


@dataclass(frozen=True)
class ScenarioResult:
    """Result of a finished scenario as reported by the runner."""

    name: str
    feature: str
    status: str
    message: str | None = None
    duration: float | None = None

    @classmethod
    def from_scenario(cls, scenario: Any) -> ScenarioResult:
        """Read a result from a behave Scenario.

        Parameters
        ----------
        scenario : Any
            behave.model.Scenario after it ran

        Returns
        -------
        ScenarioResult
            Name, feature, raw status, first failure message and duration

        Notes
        -----
        behave reports uncaught exceptions in steps as ``error`` and in hooks
        as ``hook_error``. Both are read as ``failed``.
        """
        status = _status_name(scenario.status)
        if status in ERROR_STATUSES:
            status = "failed"

        message = None
        for step in getattr(scenario, "steps", None) or []:
            if _status_name(step.status) in {"failed", *ERROR_STATUSES}:
                message = getattr(step, "error_message", None)
                break

        feature = getattr(scenario, "feature", None)
        feature_name = getattr(feature, "name", None) or "Unknown Feature"

        return cls(
            name=scenario.name,
            feature=feature_name,
            status=status,
            message=message,
            duration=getattr(scenario, "duration", None),
        )


def _status_name(status: Any) -> str:
    return str(getattr(status, "name", status) or "").lower()


class ScenarioLifecycle:
    """Drives one scenario from session open to artifact handling.

    Parameters
    ----------
    session_manager : SessionManager
        Opens and closes browser sessions
    retention : ArtifactRetentionPolicy
        Keeps or discards videos and captures failure screenshots
    run_context : RunContext
        Collects failures across the run
    cleanup_timeout : float
        Seconds the cleanup stage may take before a warning is logged
    """

    def __init__(
        self,
        session_manager: SessionManager,
        retention: ArtifactRetentionPolicy,
        run_context: RunContext,
        cleanup_timeout: float = CLEANUP_TIMEOUT_SECONDS,
    ) -> None:
        self.session_manager = session_manager
        self.retention = retention
        self.run_context = run_context
        self.cleanup_timeout = cleanup_timeout

    def start_scenario(
        self,
        name: str,
        feature: str | None = None,
        tags: list[str] | None = None,
        ci_mode: bool = False,
    ) -> ScenarioContext:
        """Log the scenario banner and open its browser session.

        Parameters
        ----------
        name : str
            Scenario name
        feature : str | None
            Feature name
        tags : list[str] | None
            Scenario tags without the leading "@"
        ci_mode : bool
            Launch the browser headless with CI flags

        Returns
        -------
        ScenarioContext
            Context with an open session

        Raises
        ------
        Exception
            Session open failures are recorded as failures of the run, then
            propagate; the scenario cannot run without a browser.
        """
        scenario_ctx = ScenarioContext(name=name, feature=feature or "Unknown Feature")
        tag_list = ", ".join(f"@{tag}" for tag in tags or []) or "No tags"

        logger.info("=" * SEPARATOR_WIDTH)
        logger.info('STARTING SCENARIO: "%s"', name)
        logger.info('FEATURE: "%s"', scenario_ctx.feature)
        logger.info("TAGS: %s", tag_list)
        logger.info("=" * SEPARATOR_WIDTH)

        try:
            scenario_ctx.session = self.session_manager.open_session(ci_mode)
        except Exception as e:
            self.record_open_failure(scenario_ctx, e)
            raise

        scenario_ctx.video_path = scenario_ctx.session.video_path
        scenario_ctx.state = ScenarioState.SESSION_OPEN
        return scenario_ctx

    def record_open_failure(self, scenario_ctx: ScenarioContext, error: Exception) -> None:
        """Record a scenario whose browser session could not be opened.

        behave still runs ``after_scenario`` for such a scenario, but there is
        no session to close and no video to handle, so the failure has to be
        recorded here for the run summary.
        """
        elapsed = (utc_now() - scenario_ctx.started_at).total_seconds()
        self.run_context.record_failure(
            OutcomeRecord(
                name=scenario_ctx.name,
                feature=scenario_ctx.feature,
                error=f"Browser session failed to open: {error}",
                timestamp=utc_now(),
                duration=format_duration(elapsed),
            )
        )
        scenario_ctx.state = ScenarioState.FAILED
        logger.error("TEST FAILED: %s (browser session failed to open: %s)", scenario_ctx.name, error)

    def before_step(self, scenario_ctx: ScenarioContext, step_text: str | None) -> None:
        """Count and log a step about to run."""
        scenario_ctx.step_number += 1
        scenario_ctx.state = ScenarioState.STEPS_RUNNING
        logger.info("-" * SEPARATOR_WIDTH)
        logger.info("STEP %s: %s", scenario_ctx.step_number, step_text or "Unknown step")
        logger.info("-" * SEPARATOR_WIDTH)

    def end_scenario(
        self,
        scenario_ctx: ScenarioContext,
        result: ScenarioResult,
        reporter: Reporter | None = None,
    ) -> Outcome:
        """Classify the result, then close the session and handle artifacts.

        Parameters
        ----------
        scenario_ctx : ScenarioContext
            Context created by start_scenario
        result : ScenarioResult
            Result reported by the runner
        reporter : Reporter | None
            Report collector for the failure screenshot

        Returns
        -------
        Outcome
            Classified outcome

        Notes
        -----
        The session is always closed before the video is touched, because the
        browser may still hold the file. Errors in this stage are logged and
        never propagate, so infrastructure problems cannot turn into scenario
        failures.
        """
        outcome = classify(result.status)
        duration = format_duration(result.duration)
        budget = TimeoutBudget(self.cleanup_timeout)

        try:
            if outcome is Outcome.FAILED:
                self.run_context.record_failure(
                    OutcomeRecord(
                        name=result.name,
                        feature=result.feature,
                        error=result.message,
                        timestamp=utc_now(),
                        duration=duration,
                    )
                )
                logger.error("TEST FAILED: %s", result.name)
                self.retention.capture_failure_screenshot(
                    scenario_ctx.page, result.name, reporter
                )
            elif outcome is Outcome.PASSED:
                scenario_ctx.passed = True
                logger.info("TEST PASSED: %s", result.name, extra={"marker": "success"})
                logger.info(
                    "Steps completed: %s (Duration: %s)", scenario_ctx.step_number, duration
                )
            elif outcome is Outcome.SKIPPED:
                logger.warning("TEST SKIPPED: %s (Status: %s)", result.name, result.status)
            else:
                logger.warning("TEST OUTCOME UNKNOWN: %s (Status: %s)", result.name, result.status)
        except Exception as e:
            logger.error("Error in after-scenario handling: %s", e)
        finally:
            scenario_ctx.state = ScenarioState[outcome.name]
            self.session_manager.close_session(scenario_ctx.session)
            scenario_ctx.state = ScenarioState.SESSION_CLOSED
            budget.checkpoint("session closed")

            try:
                self.retention.on_scenario_end(scenario_ctx.video_path, outcome, scenario_ctx.name)
            except Exception as e:
                logger.warning("Could not handle video for %s: %s", scenario_ctx.name, e)
            scenario_ctx.state = ScenarioState.ARTIFACTS_HANDLED

            if budget.exhausted():
                logger.warning(
                    "Cleanup for %s took %.1fs, over the %.0fs budget",
                    scenario_ctx.name,
                    budget.elapsed_seconds(),
                    self.cleanup_timeout,
                )
            scenario_ctx.state = ScenarioState.DONE

        return outcome

    def finish_run(self) -> RunSummary:
        """Print the run summary."""
        return self.run_context.summarize()

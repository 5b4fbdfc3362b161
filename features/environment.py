"""Behave environment hooks for the FashionHub end-to-end suite."""

import logging
from pathlib import Path

from behave.model import Scenario, Step
from behave.runner import Context
from playwright.sync_api import sync_playwright

from fashionhub_e2e.config import get_config, load_dotenv_file
from fashionhub_e2e.constants import ACTION_TIMEOUT_MS, SCREENSHOTS_DIR, VIDEOS_DIR
from fashionhub_e2e.core import (
    ArtifactRetentionPolicy,
    RunContext,
    ScenarioLifecycle,
    ScenarioResult,
    SessionManager,
    is_ci_mode,
    setup_signal_handlers,
)
from fashionhub_e2e.logging import configure_logging

logger = logging.getLogger(__name__)


class BehaveReporter:
    """Attach screenshots to behave's report through ``context.attach``."""

    def __init__(self, context: Context) -> None:
        self._context = context

    def attach(self, data: bytes, mime_type: str) -> None:
        self._context.attach(mime_type, data)


def _reporter_for(context: Context) -> BehaveReporter | None:
    if callable(getattr(context, "attach", None)):
        return BehaveReporter(context)
    return None


def before_all(context: Context) -> None:
    """Start Playwright and build the scenario lifecycle for the run."""
    configure_logging()
    load_dotenv_file(Path.cwd() / ".env")

    for directory in (VIDEOS_DIR, SCREENSHOTS_DIR):
        directory.mkdir(parents=True, exist_ok=True)

    context.ci_mode = is_ci_mode()
    context.env_config = get_config()
    logger.info("Target environment: %s (%s)", context.env_config.name, context.env_config.base_url)

    context.playwright = sync_playwright().start()
    context.lifecycle = ScenarioLifecycle(
        session_manager=SessionManager(context.playwright.chromium),
        retention=ArtifactRetentionPolicy(),
        run_context=RunContext("CI" if context.ci_mode else "local"),
    )
    context.reporter = _reporter_for(context)

    setup_signal_handlers()


def before_scenario(context: Context, scenario: Scenario) -> None:
    context.scenario_ctx = context.lifecycle.start_scenario(
        scenario.name,
        feature=scenario.feature.name if scenario.feature else None,
        tags=list(scenario.effective_tags),
        ci_mode=context.ci_mode,
    )
    context.page = context.scenario_ctx.page
    context.page.set_default_timeout(ACTION_TIMEOUT_MS)


def before_step(context: Context, step: Step) -> None:
    scenario_ctx = getattr(context, "scenario_ctx", None)
    if scenario_ctx is not None:
        context.lifecycle.before_step(scenario_ctx, f"{step.keyword} {step.name}")


def after_scenario(context: Context, scenario: Scenario) -> None:
    scenario_ctx = getattr(context, "scenario_ctx", None)
    if scenario_ctx is None:
        logger.warning("No browser session to clean up for %s", scenario.name)
        return

    context.lifecycle.end_scenario(
        scenario_ctx, ScenarioResult.from_scenario(scenario), context.reporter
    )
    context.scenario_ctx = None
    context.page = None


def after_all(context: Context) -> None:
    lifecycle = getattr(context, "lifecycle", None)
    if lifecycle is not None:
        lifecycle.finish_run()

    playwright = getattr(context, "playwright", None)
    if playwright is not None:
        playwright.stop()

"""Scenario lifecycle and artifact retention."""

from __future__ import annotations

from fashionhub_e2e.core.aggregator import OutcomeRecord, RunContext, RunSummary
from fashionhub_e2e.core.lifecycle import (
    ScenarioContext,
    ScenarioLifecycle,
    ScenarioResult,
    ScenarioState,
)
from fashionhub_e2e.core.outcome import Outcome, classify
from fashionhub_e2e.core.retention import ArtifactRetentionPolicy, Reporter
from fashionhub_e2e.core.session import SessionHandle, SessionManager, is_ci_mode
from fashionhub_e2e.core.signals import set_shutdown_callback, setup_signal_handlers

__all__ = [
    "ArtifactRetentionPolicy",
    "Outcome",
    "OutcomeRecord",
    "Reporter",
    "RunContext",
    "RunSummary",
    "ScenarioContext",
    "ScenarioLifecycle",
    "ScenarioResult",
    "ScenarioState",
    "SessionHandle",
    "SessionManager",
    "classify",
    "is_ci_mode",
    "set_shutdown_callback",
    "setup_signal_handlers",
]

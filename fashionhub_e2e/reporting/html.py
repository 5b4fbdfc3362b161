"""HTML report generation from behave JSON output.

The runner writes behave's JSON formatter output to ``reports/json/``. The
generator picks the newest non-empty file, renders a summary page plus one
page per feature with rich, and writes a plain-text ``report-info.txt`` next
to them.
"""

from __future__ import annotations

import io
import json
import logging
import os
import platform
import re
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fashionhub_e2e.constants import (
    HTML_REPORTS_DIR,
    JSON_REPORTS_DIR,
    REPORT_INDEX_NAME,
    REPORT_INFO_NAME,
)
from fashionhub_e2e.utils import iso_timestamp, utc_now

logger = logging.getLogger(__name__)

REPORT_NAME_PATTERN = re.compile(
    r"E2E-Report-([A-Z]+)(_[^-]+)?-(\d{2}-\d{2}-\d{4})_(\d{2}-\d{2}-\d{2})"
)

STATUS_STYLES = {
    "passed": "green",
    "failed": "bold red",
    "error": "bold red",
    "skipped": "yellow",
    "undefined": "magenta",
    "untested": "dim",
}

REPORT_WIDTH = 120


class ReportGenerationError(Exception):
    """Raised when no HTML report can be produced."""


@dataclass(frozen=True)
class ReportName:
    """Identity of a report derived from its JSON file name.

    Attributes
    ----------
    base_name : str
        JSON file name without extension
    display_name : str
        Name shown as the report title (without the time of day)
    environment : str
        Upper-case environment name
    tags : str
        Tag expression of the run, or "All Tests"
    date : str
        Execution date as dd-mm-yyyy
    time : str
        Execution time as HH-MM-SS
    """

    base_name: str
    display_name: str
    environment: str
    tags: str
    date: str
    time: str


def report_base_name(environment: str, tags: str | None, now: datetime) -> str:
    """Build the base name of a run's JSON report.

    Parameters
    ----------
    environment : str
        Environment the run targets
    tags : str | None
        Tag expression passed to behave
    now : datetime
        Start time of the run (local time)

    Returns
    -------
    str
        Name like ``E2E-Report-PRODUCTION_login-19-10-2026_14-03-07``
    """
    tag_suffix = ""
    if tags:
        tag_suffix = "_" + re.sub(r"\s+", "_", tags.replace("@", "", 1))
    return (
        f"E2E-Report-{environment.upper()}{tag_suffix}-"
        f"{now.strftime('%d-%m-%Y')}_{now.strftime('%H-%M-%S')}"
    )


def parse_report_name(base_name: str, environment: str, now: datetime | None = None) -> ReportName:
    """Recover environment, tags, date and time from a report file name.

    Parameters
    ----------
    base_name : str
        JSON file name without extension
    environment : str
        Fallback environment when the name does not follow the pattern
    now : datetime | None
        Fallback execution time, defaults to the current local time

    Returns
    -------
    ReportName
        Parsed report identity
    """
    match = REPORT_NAME_PATTERN.search(base_name)
    if match:
        env, tag_suffix, date, time_of_day = match.groups()
        tags = re.sub(r"\s+", " ", tag_suffix.replace("_", "", 1)) if tag_suffix else "All Tests"
        return ReportName(
            base_name=base_name,
            display_name=f"E2E-Report-{env}{tag_suffix or ''}-{date}",
            environment=env,
            tags=tags,
            date=date,
            time=time_of_day,
        )

    now = now or datetime.now()
    date = now.strftime("%d-%m-%Y")
    return ReportName(
        base_name=base_name,
        display_name=f"E2E-Report-{environment.upper()}-{date}",
        environment=environment.upper(),
        tags="All Tests",
        date=date,
        time=now.strftime("%H-%M-%S"),
    )


@dataclass
class ScenarioReport:
    name: str
    status: str
    duration: float
    steps: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None


@dataclass
class FeatureReport:
    name: str
    tags: list[str]
    scenarios: list[ScenarioReport] = field(default_factory=list)

    @property
    def status(self) -> str:
        statuses = {scenario.status for scenario in self.scenarios}
        if statuses & {"failed", "error"}:
            return "failed"
        if statuses and statuses <= {"passed"}:
            return "passed"
        return "skipped"

    @property
    def duration(self) -> float:
        return sum(scenario.duration for scenario in self.scenarios)


def _scenario_status(element: dict[str, Any]) -> str:
    if element.get("status"):
        return str(element["status"]).lower()

    statuses = [step.get("result", {}).get("status", "skipped") for step in element.get("steps", [])]
    if any(status in {"failed", "error"} for status in statuses):
        return "failed"
    if any(status == "undefined" for status in statuses):
        return "undefined"
    if statuses and all(status == "passed" for status in statuses):
        return "passed"
    return "skipped"


def parse_behave_json(data: list[dict[str, Any]]) -> list[FeatureReport]:
    """Convert behave's JSON formatter output into report models.

    Parameters
    ----------
    data : list[dict[str, Any]]
        Parsed JSON document (one entry per feature)

    Returns
    -------
    list[FeatureReport]
        Features with their scenarios; backgrounds are skipped
    """
    features = []

    for feature in data:
        report = FeatureReport(name=feature.get("name", "Unnamed feature"), tags=feature.get("tags", []))

        for element in feature.get("elements", []):
            if element.get("type") == "background":
                continue

            steps = element.get("steps", [])
            duration = sum(step.get("result", {}).get("duration", 0.0) or 0.0 for step in steps)
            error = next(
                (
                    step["result"].get("error_message")
                    for step in steps
                    if step.get("result", {}).get("status") in {"failed", "error"}
                ),
                None,
            )
            if isinstance(error, list):
                error = "\n".join(error)

            report.scenarios.append(
                ScenarioReport(
                    name=element.get("name", "Unnamed scenario"),
                    status=_scenario_status(element),
                    duration=duration,
                    steps=steps,
                    error=error,
                )
            )

        features.append(report)

    return features


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-") or "feature"


def _status_text(status: str) -> str:
    style = STATUS_STYLES.get(status, "white")
    return f"[{style}]{status.upper()}[/{style}]"


class ReportGenerator:
    """Render the newest behave JSON report as HTML.

    Parameters
    ----------
    json_dir : Path
        Directory holding behave JSON reports
    html_dir : Path
        Directory receiving one sub-directory per rendered report
    environment : str | None
        Environment label used when the JSON name carries none; defaults to
        the ENV_VARS variable
    """

    def __init__(
        self,
        json_dir: Path = JSON_REPORTS_DIR,
        html_dir: Path = HTML_REPORTS_DIR,
        environment: str | None = None,
    ) -> None:
        self.json_dir = Path(json_dir)
        self.html_dir = Path(html_dir)
        self.environment = environment or os.environ.get("ENV_VARS") or "production"

    def latest_json_report(self) -> Path:
        """Find the most recently modified non-empty JSON report.

        Raises
        ------
        ReportGenerationError
            If the directory holds no non-empty JSON file
        """
        self.json_dir.mkdir(parents=True, exist_ok=True)

        candidates = [
            path
            for path in self.json_dir.glob("*.json")
            if path.is_file() and path.stat().st_size > 0
        ]
        if not candidates:
            raise ReportGenerationError(
                f"No valid JSON files found in {self.json_dir}. "
                "Make sure tests have run successfully."
            )

        return max(candidates, key=lambda path: path.stat().st_mtime)

    def generate(self) -> Path:
        """Generate the HTML report for the newest JSON report.

        Returns
        -------
        Path
            Path of the main report page

        Raises
        ------
        ReportGenerationError
            If no JSON report exists or it cannot be parsed
        """
        json_file = self.latest_json_report()
        logger.info("Processing latest report: %s", json_file.name)

        try:
            data = json.loads(json_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ReportGenerationError(f"Could not read {json_file}: {e}") from e

        if not isinstance(data, list):
            raise ReportGenerationError(f"Unexpected report format in {json_file}")

        name = parse_report_name(json_file.stem, self.environment)
        features = parse_behave_json(data)

        logger.info("Report Name: %s", name.display_name)
        logger.info("Tags: %s", name.tags)
        logger.info("Environment: %s", name.environment)

        report_dir = self.html_dir / name.base_name
        features_dir = report_dir / "features"
        features_dir.mkdir(parents=True, exist_ok=True)

        index_path = report_dir / REPORT_INDEX_NAME
        self._render_index(name, features, json_file.name).save_html(str(index_path))

        for feature in features:
            feature_path = features_dir / f"{slugify(feature.name)}.html"
            self._render_feature(name, feature).save_html(str(feature_path))

        self._write_info_file(report_dir / REPORT_INFO_NAME, name, json_file.name)

        logger.info("HTML report generated successfully", extra={"marker": "success"})
        logger.info("Report location: %s", report_dir)
        logger.info("Open report: %s", index_path.resolve().as_uri())
        return index_path

    def _recording_console(self) -> Console:
        return Console(record=True, file=io.StringIO(), width=REPORT_WIDTH)

    def _render_index(
        self, name: ReportName, features: list[FeatureReport], json_source: str
    ) -> Console:
        console = self._recording_console()
        console.rule(f"[bold]{escape(name.display_name)} - Automation")
        console.print(f"Test Automation Report - {name.environment}", style="bold")

        metadata = Table(show_header=False, box=None)
        metadata.add_column(style="bold")
        metadata.add_column()
        for label, value in (
            ("Project", "FashionHub E2E"),
            ("Test Suite", name.tags),
            ("Environment", name.environment),
            ("Execution Date", name.date.replace("-", "/")),
            ("Execution Time", name.time.replace("-", ":")),
            ("JSON Source", json_source),
            ("Browser", "chromium"),
            ("Platform", f"{sys.platform} (Python {platform.python_version()})"),
        ):
            metadata.add_row(label, escape(value))
        console.print(metadata)

        scenarios = [scenario for feature in features for scenario in feature.scenarios]
        totals = Table(title="Totals")
        for column in ("Features", "Scenarios", "Passed", "Failed", "Skipped"):
            totals.add_column(column, justify="right")
        totals.add_row(
            str(len(features)),
            str(len(scenarios)),
            str(sum(1 for s in scenarios if s.status == "passed")),
            str(sum(1 for s in scenarios if s.status in {"failed", "error"})),
            str(sum(1 for s in scenarios if s.status not in {"passed", "failed", "error"})),
        )
        console.print(totals)

        table = Table(title="Features")
        table.add_column("Feature")
        table.add_column("Status")
        table.add_column("Scenarios", justify="right")
        table.add_column("Duration", justify="right")
        table.add_column("Details")
        for feature in features:
            table.add_row(
                escape(feature.name),
                _status_text(feature.status),
                str(len(feature.scenarios)),
                f"{feature.duration:.2f}s",
                f"features/{slugify(feature.name)}.html",
            )
        console.print(table)

        console.rule(f"Generated {iso_timestamp(utc_now())} | {escape(name.base_name)}")
        return console

    def _render_feature(self, name: ReportName, feature: FeatureReport) -> Console:
        console = self._recording_console()
        console.rule(f"[bold]{escape(feature.name)}")
        if feature.tags:
            console.print("Tags: " + escape(", ".join(f"@{tag}" for tag in feature.tags)))

        for scenario in feature.scenarios:
            table = Table(title=f"{escape(scenario.name)} ({scenario.duration:.2f}s)")
            table.add_column("Step")
            table.add_column("Status")
            table.add_column("Duration", justify="right")
            for step in scenario.steps:
                result = step.get("result", {})
                status = result.get("status", "skipped")
                table.add_row(
                    escape(f"{step.get('keyword', '')} {step.get('name', '')}".strip()),
                    _status_text(status),
                    f"{result.get('duration', 0.0) or 0.0:.3f}s",
                )
            console.print(table)
            if scenario.error:
                console.print(escape(scenario.error), style="red")

        console.rule(escape(name.display_name))
        return console

    def _write_info_file(self, path: Path, name: ReportName, json_source: str) -> None:
        info = "\n".join(
            [
                "Automation Test Report",
                "===========================",
                f"Report Name: {name.display_name}",
                f"Environment: {name.environment}",
                f"Test Suite: {name.tags}",
                f"Execution Date: {name.date.replace('-', '/')}",
                f"Execution Time: {name.time.replace('-', ':')}",
                f"JSON Source: {json_source}",
                "",
                "Files:",
                f"- Main Report: {REPORT_INDEX_NAME}",
                "- Features: features/ directory",
                "",
                f"Generated: {iso_timestamp(utc_now())}",
            ]
        )
        path.write_text(info, encoding="utf-8")
        logger.debug("Created %s", path.name)

"""HTML reports and artifact cleanup."""

from fashionhub_e2e.reporting.cleaner import ArtifactCleaner, CleanResult
from fashionhub_e2e.reporting.html import (
    ReportGenerationError,
    ReportGenerator,
    parse_report_name,
    report_base_name,
)

__all__ = [
    "ArtifactCleaner",
    "CleanResult",
    "ReportGenerationError",
    "ReportGenerator",
    "parse_report_name",
    "report_base_name",
]

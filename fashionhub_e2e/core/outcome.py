"""Scenario outcome classification."""

from enum import Enum


class Outcome(Enum):
    """Classified result of a scenario."""

    PASSED = "PASSED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"
    UNKNOWN = "UNKNOWN"


SKIPPED_STATUSES = frozenset({"skipped", "pending", "undefined"})
"""Raw statuses treated as skipped.

A step without a matching definition counts the same as an explicitly
skipped one.
"""


def classify(raw_status: str | None) -> Outcome:
    """Map a raw runner status to an Outcome.

    Parameters
    ----------
    raw_status : str | None
        Status reported by the scenario runner (case-insensitive)

    Returns
    -------
    Outcome
        PASSED, FAILED, SKIPPED, or UNKNOWN for anything unrecognized
    """
    status = (raw_status or "").strip().lower()

    if status == "failed":
        return Outcome.FAILED
    if status == "passed":
        return Outcome.PASSED
    if status in SKIPPED_STATUSES:
        return Outcome.SKIPPED

    return Outcome.UNKNOWN

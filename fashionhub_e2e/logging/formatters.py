"""Logging formatters for suite output."""

import logging

LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"

LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MARKERS = {
    "success": "SUCCESS",
    "step": "STEP",
    "result": "RESULT",
}


class MarkerFormatter(logging.Formatter):
    """Logging formatter that prepends a marker based on the extra parameter.

    ``logger.info("Logged in", extra={"marker": "success"})`` renders as
    ``[2026-10-19 14:03:07] INFO: SUCCESS Logged in``.
    """

    def __init__(self, fmt: str = LOG_FORMAT, datefmt: str = LOG_DATE_FORMAT) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with marker prefix if present.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to format

        Returns
        -------
        str
            Formatted log message with optional marker
        """
        marker = MARKERS.get(getattr(record, "marker", None) or "")
        if marker is None:
            return super().format(record)

        original = record.msg
        record.msg = f"{marker} {original}"
        try:
            return super().format(record)
        finally:
            record.msg = original


class LevelRoutingFilter(logging.Filter):
    """Filter that routes records to stdout or stderr by level.

    Parameters
    ----------
    stream_type : str
        Stream type to allow: "stdout" (below WARNING) or "stderr"
        (WARNING and above)
    """

    def __init__(self, stream_type: str) -> None:
        super().__init__()
        self.stream_type = stream_type

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter log records by level.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to filter

        Returns
        -------
        bool
            True if record should be emitted by this handler
        """
        if self.stream_type == "stderr":
            return record.levelno >= logging.WARNING
        return record.levelno < logging.WARNING

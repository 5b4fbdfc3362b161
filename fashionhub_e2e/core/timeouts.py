"""Time budget tracking for scenario cleanup."""

import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class TimeoutBudget:
    """Tracks elapsed time against a fixed budget.

    Parameters
    ----------
    budget_seconds : float
        Total budget in seconds
    clock : Callable[[], float]
        Monotonic clock, replaceable in tests
    """

    def __init__(
        self, budget_seconds: float, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self.budget_seconds = budget_seconds
        self.clock = clock
        self.start_time = clock()
        self.deadline = self.start_time + budget_seconds

    def elapsed_seconds(self) -> float:
        """Get elapsed time since start.

        Returns
        -------
        float
            Elapsed seconds
        """
        return self.clock() - self.start_time

    def remaining_seconds(self) -> float:
        """Get remaining time until deadline.

        Returns
        -------
        float
            Remaining seconds (negative once the deadline passed)
        """
        return self.deadline - self.clock()

    def exhausted(self) -> bool:
        return self.remaining_seconds() <= 0

    def checkpoint(self, description: str) -> None:
        """Log elapsed and remaining time at a checkpoint.

        Parameters
        ----------
        description : str
            Description of checkpoint for logging
        """
        logger.debug(
            "Timeout checkpoint '%s': elapsed=%.2fs, remaining=%.2fs",
            description,
            self.elapsed_seconds(),
            self.remaining_seconds(),
        )

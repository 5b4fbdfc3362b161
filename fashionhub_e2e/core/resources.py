"""Registry for releasing nested resources in a fixed order."""

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


class ResourceRegistry:
    """Manages resource release with deterministic ordering.

    Resources are released in reverse registration order, so a browser
    registered before its context and page is released last. Release
    continues when an individual disposal fails; failures are logged as
    warnings.

    Attributes
    ----------
    resources : list[dict]
        Registered resources in acquisition order
    """

    def __init__(self) -> None:
        self.resources: list[dict[str, Any]] = []

    def register(
        self,
        kind: str,
        handle: Any,
        dispose_fn: Callable[[Any], None],
    ) -> None:
        """Register a resource for release.

        Parameters
        ----------
        kind : str
            Type of resource (e.g., "browser", "context", "page")
        handle : Any
            Resource handle passed to dispose_fn
        dispose_fn : Callable
            Function called during release: dispose_fn(handle)
        """
        self.resources.append({"kind": kind, "handle": handle, "dispose_fn": dispose_fn})
        logger.debug("Registered %s", kind)

    def release_all(self) -> list[str]:
        """Release every registered resource in reverse acquisition order.

        Returns
        -------
        list[str]
            Kinds of the resources whose release failed
        """
        failed: list[str] = []

        while self.resources:
            entry = self.resources.pop()
            try:
                entry["dispose_fn"](entry["handle"])
                logger.debug("%s closed successfully", entry["kind"])
            except Exception as e:
                logger.warning("Error closing %s: %s", entry["kind"], e)
                failed.append(entry["kind"])

        return failed

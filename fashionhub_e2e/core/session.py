"""Browser session management for scenarios."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from fashionhub_e2e.constants import CI_BROWSER_ARGS, VIDEO_SIZE, VIDEOS_DIR, VIEWPORT
from fashionhub_e2e.core.resources import ResourceRegistry

logger = logging.getLogger(__name__)


def is_ci_mode(environ: Mapping[str, str] | None = None) -> bool:
    """Check whether the suite runs in CI.

    Parameters
    ----------
    environ : Mapping[str, str] | None
        Environment to read, defaults to os.environ

    Returns
    -------
    bool
        True when the CI variable is "true"
    """
    if environ is None:
        environ = os.environ
    return environ.get("CI", "").lower() == "true"


@dataclass
class SessionHandle:
    """One browser, one context and one page owned by a single scenario.

    Attributes
    ----------
    browser : Any
        Playwright Browser
    context : Any
        Playwright BrowserContext recording video
    page : Any
        Playwright Page
    video_path : Path | None
        Path of the video being recorded for the page, if any
    registry : ResourceRegistry
        Releases page, context and browser in that order
    """

    browser: Any
    context: Any
    page: Any
    video_path: Path | None = None
    registry: ResourceRegistry = field(default_factory=ResourceRegistry)
    closed: bool = False


class SessionManager:
    """Opens and closes per-scenario browser sessions.

    Parameters
    ----------
    browser_type : Any
        Playwright BrowserType used to launch browsers (e.g. playwright.chromium)
    videos_dir : Path
        Directory Playwright records videos into
    """

    def __init__(self, browser_type: Any, videos_dir: Path = VIDEOS_DIR) -> None:
        self.browser_type = browser_type
        self.videos_dir = Path(videos_dir)

    def open_session(self, ci_mode: bool) -> SessionHandle:
        """Launch a browser and open a recording context with one page.

        Parameters
        ----------
        ci_mode : bool
            Run headless with sandbox-disabling flags

        Returns
        -------
        SessionHandle
            Handle owning browser, context and page

        Raises
        ------
        playwright.sync_api.Error
            If the browser cannot be launched or the page cannot be opened.
            Resources acquired before the failure are released first.
        """
        registry = ResourceRegistry()

        browser = self.browser_type.launch(
            headless=ci_mode,
            args=list(CI_BROWSER_ARGS) if ci_mode else [],
        )
        registry.register("browser", browser, lambda b: b.close())

        try:
            context = browser.new_context(
                record_video_dir=str(self.videos_dir),
                record_video_size=VIDEO_SIZE,
                viewport=VIEWPORT,
            )
            registry.register("context", context, lambda c: c.close())

            page = context.new_page()
            registry.register("page", page, lambda p: p.close())
        except Exception:
            registry.release_all()
            raise

        video_path = None
        if page.video is not None:
            video_path = Path(page.video.path())

        logger.debug("Browser session opened (headless=%s)", ci_mode)

        return SessionHandle(
            browser=browser,
            context=context,
            page=page,
            video_path=video_path,
            registry=registry,
        )

    def close_session(self, handle: SessionHandle | None) -> None:
        """Release page, context and browser without raising.

        Parameters
        ----------
        handle : SessionHandle | None
            Session to close; None and already closed handles are ignored

        Notes
        -----
        Each release is attempted even if an earlier one fails, so a broken
        page never leaks its browser process. Failures are logged only, since
        cleanup must not change the scenario's outcome.
        """
        if handle is None or handle.closed:
            return

        failed = handle.registry.release_all()
        handle.closed = True

        if failed:
            logger.warning("Browser session closed with errors in: %s", ", ".join(failed))
        else:
            logger.debug("Browser session closed")

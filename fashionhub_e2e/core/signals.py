"""Signal handling for fast shutdown."""

from __future__ import annotations

import logging
import signal
import sys
import threading
import types
from collections.abc import Callable

logger = logging.getLogger(__name__)

EXIT_CODES = {signal.SIGINT: 130, signal.SIGTERM: 143}


class ShutdownCallbackManager:
    """Thread-safe holder of the callback run when a signal arrives.

    The lock is reentrant: signal handlers run on the main thread, possibly
    while it is inside ``set``.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._callback: Callable[[], None] | None = None

    def set(self, callback: Callable[[], None] | None) -> None:
        """Set the shutdown callback.

        Parameters
        ----------
        callback : Callable[[], None] | None
            Function run before exiting, e.g. killing a child process
        """
        with self._lock:
            self._callback = callback

    def get(self) -> Callable[[], None] | None:
        with self._lock:
            return self._callback

    def run(self) -> None:
        """Run the callback, logging its failure instead of raising."""
        with self._lock:
            callback = self._callback
        if callback is None:
            return
        try:
            callback()
        except Exception as e:
            logger.debug("Shutdown callback failed: %s", e)


_shutdown_manager = ShutdownCallbackManager()


def handle_shutdown_signal(signum: int, frame: types.FrameType | None) -> None:
    """Exit immediately on SIGINT or SIGTERM.

    Parameters
    ----------
    signum : int
        Signal number
    frame : types.FrameType | None
        Signal frame (unused)

    Notes
    -----
    In-flight scenario cleanup is abandoned; a hung browser never keeps the
    process alive. Exit codes are 130 for SIGINT, 143 for SIGTERM and 1
    otherwise.
    """
    name = signal.Signals(signum).name
    logger.warning("%s received - shutting down", name)
    _shutdown_manager.run()
    sys.exit(EXIT_CODES.get(signum, 1))


def setup_signal_handlers(on_signal: Callable[[], None] | None = None) -> None:
    """Register SIGINT and SIGTERM handlers.

    Parameters
    ----------
    on_signal : Callable[[], None] | None
        Callback run before exiting
    """
    _shutdown_manager.set(on_signal)
    signal.signal(signal.SIGINT, handle_shutdown_signal)
    signal.signal(signal.SIGTERM, handle_shutdown_signal)


def set_shutdown_callback(callback: Callable[[], None] | None) -> None:
    """Replace the callback run by the signal handlers."""
    _shutdown_manager.set(callback)


def get_shutdown_callback() -> Callable[[], None] | None:
    """Get the callback run by the signal handlers."""
    return _shutdown_manager.get()

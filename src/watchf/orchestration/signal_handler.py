"""
Signal handling for the orchestration module.

SIGINT and SIGTERM unwind the main thread by raising ShutdownRequested from
the handler; the CLI catches it and tears the session down.
"""

import logging
import signal
import threading
from typing import Any, Dict, Iterable

from ..validation import ShutdownRequested

logger = logging.getLogger(__name__)


class SignalHandler:
    """
    Manages signal registration and cleanup for a watch session.
    """

    def __init__(self):
        self.shutdown_requested = threading.Event()
        self._original_handlers: Dict[int, Any] = {}

    def setup_signal_handlers(
        self, signals: Iterable[int] = (signal.SIGINT, signal.SIGTERM)
    ) -> None:
        """Install the shutdown handler, remembering the previous handlers."""
        for signum in signals:
            try:
                self._original_handlers[signum] = signal.signal(signum, self._handle_signal)
            except (ValueError, OSError) as e:
                logger.warning(f"Failed to set up handler for signal {signum}: {e}")
        logger.debug("Signal handlers set up")

    def cleanup_signal_handlers(self) -> None:
        """Restore original signal handlers."""
        for signum, handler in self._original_handlers.items():
            try:
                signal.signal(signum, handler)
            except (ValueError, OSError) as e:
                logger.warning(f"Failed to restore handler for signal {signum}: {e}")
        self._original_handlers.clear()
        logger.debug("Signal handlers restored")

    def _handle_signal(self, signum: int, frame: Any) -> None:
        if self.shutdown_requested.is_set():
            logger.warning("Shutdown already in progress. Please be patient.")
            return
        logger.info(f"Signal {signal.strsignal(signum)} received. Shutting down...")
        self.shutdown_requested.set()
        raise ShutdownRequested(signum)

"""
Orchestration module for watch sessions.

Components:
- RebuildCoordinator: the build, classify, restart loop
- ProcessSupervisor: run-mode child process lifecycle
- start_watching: watchdog observer feeding the event queue
- SignalHandler: SIGINT/SIGTERM shutdown
"""

from .coordinator import RebuildCoordinator
from .process_manager import ProcessSupervisor
from .shared_state import RESTART, STOP, TimeoutConstants
from .signal_handler import SignalHandler
from .watcher import WatchEventHandler, start_watching, to_change_event

__all__ = [
    "RebuildCoordinator",
    "ProcessSupervisor",
    "RESTART",
    "STOP",
    "TimeoutConstants",
    "SignalHandler",
    "WatchEventHandler",
    "start_watching",
    "to_change_event",
]

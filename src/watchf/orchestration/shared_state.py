"""
Shared constants for the orchestration module.

This module defines the queue sentinels and timeouts used by the
coordinator, the supervisor and the CLI teardown.
"""


class QueueSignal:
    """A named, payload-free queue message."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"<{self.name}>"


# Ends the coordinator loop or the supervisor thread.
STOP = QueueSignal("STOP")
# Asks the supervisor to restart its child after a successful build.
RESTART = QueueSignal("RESTART")


class TimeoutConstants:
    """
    Centralized timeout configuration.
    """
    # Process termination timeouts
    TERMINATION_GRACEFUL_TIMEOUT = 5.0
    TERMINATION_FORCE_TIMEOUT = 2.0
    DESCENDANT_TERMINATION_TIMEOUT = 2.0

    # Thread join timeouts
    SUPERVISOR_JOIN_TIMEOUT = 15.0
    OBSERVER_JOIN_TIMEOUT = 5.0

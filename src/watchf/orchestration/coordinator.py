"""
Rebuild coordination.

This module contains the top-level loop of a watch session. It alternates
between building and waiting for filesystem changes:

1. The loop starts with a rebuild pending, so the first pass always builds.
2. While a rebuild is pending, the flag is cleared, the rebuild start time
   is recorded, and the build runs. On success the artifact timestamps are
   refreshed and, in run mode, the supervisor is asked to restart the child.
3. Otherwise the loop blocks on the event queue for the next notification.
4. Watch errors are logged and ignored; change events that the classifier
   accepts mark a rebuild as pending.

Builds never overlap because the loop is strictly sequential. Events that
arrive while a build runs are queued and classified afterwards against the
new rebuild time, so a burst of edits collapses into one extra build.
"""

import logging
import queue
import time
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from ..classification import is_newer_than, read_mtime, should_rebuild
from ..executor import build
from ..models.config import WatchfConfig
from ..models.runtime import (
    ArtifactRecord,
    ChangeEvent,
    CoordinatorState,
    RebuildState,
    WatchError,
)
from ..validation import (
    BuildError,
    BuildOutputError,
    ErrorSeverity,
    handle_build_error,
    handle_error,
)
from .process_manager import ProcessSupervisor
from .shared_state import STOP, QueueSignal

logger = logging.getLogger(__name__)

Builder = Callable[[Sequence[str], Sequence[str]], List[Path]]
QueueItem = Union[ChangeEvent, WatchError, QueueSignal]


class RebuildCoordinator:
    """
    Owns the rebuild state and drives the build, classify, restart cycle.
    """

    def __init__(
        self,
        config: WatchfConfig,
        events: "queue.Queue[QueueItem]",
        supervisor: Optional[ProcessSupervisor] = None,
        builder: Builder = build,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            config: Validated configuration
            events: FIFO queue fed by the watch subsystem
            supervisor: Process supervisor to notify after each successful
                build; None in build-only mode
            builder: Runs the build and returns executable paths
            clock: Wall-clock source, comparable with file modification times
        """
        self.config = config
        self.events = events
        self.supervisor = supervisor
        self._builder = builder
        self._clock = clock

        self.state = RebuildState()
        self.status = CoordinatorState.IDLE

    def run(self) -> None:
        """
        Run until the STOP sentinel is received.

        Raises:
            BuildError: If a build fails under the abort policy
            SupervisorError: If the supervisor has stopped after a failure
        """
        mode = "run" if self.supervisor is not None else "build"
        logger.info(f"Starting rebuild loop in {mode} mode")
        try:
            while True:
                if self.state.pending:
                    self.rebuild()
                    continue

                self.status = CoordinatorState.WAITING
                item = self.events.get()
                if item is STOP:
                    logger.info("Rebuild loop stopped")
                    break
                self.handle(item)
        finally:
            self.status = CoordinatorState.IDLE

    def stop(self) -> None:
        """Ask the loop to exit once it next waits for an event."""
        self.events.put(STOP)

    def rebuild(self) -> bool:
        """
        Perform one rebuild attempt.

        Returns:
            True if the build succeeded, False if it failed under the wait
            policy

        Raises:
            BuildError: If the build fails under the abort policy
        """
        state = self.state
        state.pending = False
        # Recorded before the build so edits made during it still count as newer.
        state.last_rebuild_time = max(state.last_rebuild_time, self._clock())
        state.build_count += 1
        self.status = CoordinatorState.BUILDING

        try:
            executables = self._builder(self.config.build_cmd, self.config.message_format)
            self._record_artifacts(executables)
        except BuildError as e:
            state.last_build_failed = True
            if self.config.policy.on_build_failure != "wait":
                raise
            handle_build_error(
                error=e,
                context=f"attempt #{state.build_count}",
                severity=ErrorSeverity.ERROR,
                reraise=False,
                logger=logger,
            )
            logger.info("Waiting for the next change before rebuilding")
            return False
        finally:
            self.status = CoordinatorState.IDLE

        state.last_build_failed = False
        if self.supervisor is not None:
            self.supervisor.request_restart()
        return True

    def _record_artifacts(self, executables: List[Path]) -> None:
        timestamps: ArtifactRecord = {}
        for path in executables:
            mtime = read_mtime(path)
            if mtime is None:
                raise BuildOutputError(f"cannot read modification time of artifact {path}")
            timestamps[path] = mtime

        if self.config.policy.artifact_map == "replace":
            self.state.artifacts = timestamps
        else:
            self.state.artifacts.update(timestamps)
        logger.debug(f"Tracking {len(self.state.artifacts)} artifact(s)")

    def handle(self, item: QueueItem) -> bool:
        """
        Process one item from the event queue.

        Returns:
            True if the item made a rebuild pending
        """
        if isinstance(item, WatchError):
            handle_error(
                error=item.error,
                context="watch subsystem",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=logger,
            )
            return False

        if self.state.last_build_failed:
            # No trustworthy artifact timestamps after a failed build.
            qualifies = is_newer_than(item, self.state.last_rebuild_time)
        else:
            qualifies = should_rebuild(item, self.state.artifacts, self.state.last_rebuild_time)

        if qualifies:
            changed = ", ".join(str(path) for path in item.paths)
            logger.info(f"Change detected ({item.kind.value}: {changed}), rebuilding")
            self.state.pending = True
        return qualifies

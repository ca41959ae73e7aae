"""
Process supervision for run mode.

This module owns the long-lived child process started from the configured
run command. A dedicated thread waits for restart requests from the rebuild
coordinator; for each one it terminates the current child together with its
descendants, reaps it, and spawns a fresh instance.
"""

import logging
import queue
import subprocess
import threading
from typing import List, Optional, Sequence

import psutil

from ..models.config import WatchfConfig
from ..models.runtime import SupervisorState
from ..system.commands import format_command, spawn_command
from ..validation import (
    SpawnError,
    SupervisorError,
    TerminationError,
    simple_retry,
)
from .shared_state import RESTART, STOP, QueueSignal, TimeoutConstants

logger = logging.getLogger(__name__)


class ProcessSupervisor:
    """
    Restarts the run command each time a rebuild succeeds.

    The coordinator only ever calls request_restart(); the child process
    handle is touched exclusively by the supervisor thread (or by stop()
    once that thread is gone).
    """

    def __init__(
        self,
        run_cmd: Sequence[str],
        termination_timeout: float = TimeoutConstants.TERMINATION_GRACEFUL_TIMEOUT,
        kill_failure_policy: str = "abort",
        kill_retry_attempts: int = 3,
        kill_retry_delay: float = 0.5,
    ):
        """
        Args:
            run_cmd: Program followed by its arguments
            termination_timeout: Seconds to wait after SIGTERM before SIGKILL
            kill_failure_policy: "abort" stops supervision when the child
                cannot be terminated, "retry" retries and then respawns anyway
            kill_retry_attempts: Termination attempts under the retry policy
            kill_retry_delay: Seconds between termination attempts
        """
        self.run_cmd = list(run_cmd)
        self.termination_timeout = termination_timeout
        self.kill_failure_policy = kill_failure_policy
        self.kill_retry_attempts = kill_retry_attempts
        self.kill_retry_delay = kill_retry_delay

        self.process: Optional[subprocess.Popen] = None
        self.state = SupervisorState.NOT_STARTED
        self.failure: Optional[SupervisorError] = None
        self.spawn_count = 0

        self._requests: "queue.Queue[QueueSignal]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None

    @classmethod
    def from_config(cls, config: WatchfConfig) -> "ProcessSupervisor":
        return cls(
            run_cmd=config.run_cmd,
            termination_timeout=config.supervisor.termination_timeout,
            kill_failure_policy=config.policy.on_kill_failure,
            kill_retry_attempts=config.supervisor.kill_retry_attempts,
            kill_retry_delay=config.supervisor.kill_retry_delay,
        )

    # --- Coordinator-facing interface ---

    def start(self) -> None:
        """
        Start the supervisor thread without spawning a child.

        The first child is spawned on the first restart request, i.e. after
        the initial build has succeeded, rather than when the thread starts.
        The run command's program usually does not exist before that build.
        """
        if self._thread is not None:
            raise RuntimeError("Process supervisor already started")
        self._thread = threading.Thread(
            target=self._run, name="watchf-supervisor", daemon=True
        )
        self._thread.start()
        logger.debug(f"Process supervisor started for '{format_command(self.run_cmd)}'")

    def request_restart(self) -> None:
        """
        Ask for the child to be (re)started.

        Raises:
            SupervisorError: If the supervisor has already stopped because of
                an earlier failure
        """
        if self.failure is not None:
            raise SupervisorError(f"process supervisor has stopped: {self.failure}") from self.failure
        self._requests.put(RESTART)

    def stop(self, timeout: float = TimeoutConstants.SUPERVISOR_JOIN_TIMEOUT) -> None:
        """Terminate the child and stop the supervisor thread."""
        if self._thread is not None and self._thread.is_alive():
            self._requests.put(STOP)
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("Process supervisor thread did not stop in time")
                return
        else:
            self._shutdown_child()
        self.state = SupervisorState.TERMINATED

    # --- Supervisor thread ---

    def _run(self) -> None:
        while True:
            request = self._requests.get()
            if request is STOP:
                self._shutdown_child()
                break
            try:
                self.restart()
            except SupervisorError as e:
                self.failure = e
                self.state = SupervisorState.TERMINATED
                logger.critical(f"Process supervisor stopped: {e}")
                return
        self.state = SupervisorState.TERMINATED

    def restart(self) -> subprocess.Popen:
        """
        Terminate the current child, if any, and spawn a new one.

        Returns:
            The newly spawned process

        Raises:
            TerminationError: If the child cannot be terminated under the
                abort policy
            SpawnError: If the run command cannot be started
        """
        if self.process is not None:
            self.state = SupervisorState.RESTARTING
            self._terminate_with_policy()
        self.process = self._spawn()
        self.state = SupervisorState.RUNNING
        return self.process

    def _spawn(self) -> subprocess.Popen:
        command_str = format_command(self.run_cmd)
        try:
            process = spawn_command(self.run_cmd)
        except OSError as e:
            raise SpawnError(f"failed to start run command '{command_str}': {e}") from e
        self.spawn_count += 1
        logger.info(f"Started '{command_str}' with PID {process.pid}")
        return process

    def _terminate_with_policy(self) -> None:
        if self.kill_failure_policy != "retry":
            self.terminate_child()
            return

        pid = self.process.pid
        try:
            simple_retry(
                self.terminate_child,
                max_attempts=self.kill_retry_attempts,
                delay=self.kill_retry_delay,
                context=f"terminating child with PID {pid}",
                retry_on=(TerminationError,),
            )
        except TerminationError as e:
            logger.error(f"Giving up on child with PID {pid}, starting a new instance anyway: {e}")

    def terminate_child(self) -> None:
        """
        Terminate the current child and its descendants, then reap it.

        SIGTERM is sent first; the child gets termination_timeout seconds
        before SIGKILL. A child that has already exited is just reaped.

        Raises:
            TerminationError: If signalling fails or the child survives SIGKILL
        """
        process = self.process
        if process is None:
            return

        if process.poll() is not None:
            logger.info(f"Child with PID {process.pid} already exited with code {process.returncode}")
            return

        descendants = self._descendants(process.pid)
        logger.info(f"Terminating child with PID {process.pid} and {len(descendants)} descendant(s)")

        try:
            process.terminate()
        except OSError as e:
            raise TerminationError(f"failed to kill child with PID {process.pid}: {e}") from e
        self._signal_descendants(descendants, force=False)

        try:
            returncode = process.wait(timeout=self.termination_timeout)
        except subprocess.TimeoutExpired:
            logger.warning(
                f"Child with PID {process.pid} ignored SIGTERM for {self.termination_timeout}s, sending SIGKILL"
            )
            try:
                process.kill()
            except OSError as e:
                raise TerminationError(f"failed to kill child with PID {process.pid}: {e}") from e
            try:
                returncode = process.wait(timeout=TimeoutConstants.TERMINATION_FORCE_TIMEOUT)
            except subprocess.TimeoutExpired as e:
                raise TerminationError(f"child with PID {process.pid} survived SIGKILL") from e

        self._wait_for_descendants(descendants)
        logger.info(f"Child with PID {process.pid} exited with code {returncode}")

    def _shutdown_child(self) -> None:
        try:
            self.terminate_child()
        except TerminationError as e:
            logger.error(f"Failed to stop child during shutdown: {e}")

    # --- Descendant handling ---

    def _descendants(self, pid: int) -> List[psutil.Process]:
        """Snapshot the child's process tree before it is signalled."""
        try:
            return psutil.Process(pid).children(recursive=True)
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            return []

    def _signal_descendants(self, descendants: List[psutil.Process], force: bool) -> None:
        for proc in descendants:
            try:
                if force:
                    proc.kill()
                else:
                    proc.terminate()
            except psutil.NoSuchProcess:
                continue
            except psutil.AccessDenied:
                logger.warning(f"Access denied signalling descendant PID {proc.pid}")

    def _wait_for_descendants(self, descendants: List[psutil.Process]) -> None:
        if not descendants:
            return
        _, alive = psutil.wait_procs(descendants, timeout=TimeoutConstants.DESCENDANT_TERMINATION_TIMEOUT)
        if not alive:
            return
        logger.warning(f"{len(alive)} descendant(s) ignored SIGTERM, sending SIGKILL")
        self._signal_descendants(alive, force=True)
        _, alive = psutil.wait_procs(alive, timeout=TimeoutConstants.TERMINATION_FORCE_TIMEOUT)
        for proc in alive:
            logger.error(f"Descendant PID {proc.pid} survived SIGKILL")

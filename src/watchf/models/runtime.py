"""
Runtime data models.

This module contains the structures that flow through a watch session:
change notifications, build records, and the coordinator's rebuild state.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple

# Artifact path to its last observed modification time.
ArtifactRecord = Dict[Path, float]


class ChangeKind(Enum):
    """Kind of filesystem change reported by the watch subsystem."""
    CREATE = "create"
    MODIFY = "modify"
    REMOVE = "remove"
    OTHER = "other"


@dataclass(frozen=True)
class ChangeEvent:
    """
    A single filesystem change notification.
    """

    kind: ChangeKind
    paths: Tuple[Path, ...]


@dataclass(frozen=True)
class WatchError:
    """
    An error reported by the watch subsystem in place of an event.
    """

    error: BaseException

    def __str__(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"


@dataclass
class BuildArtifact:
    """
    One `compiler-artifact` record from the build tool's JSON output.
    """

    reason: str
    package_id: str = ""
    target_name: str = ""
    target_kinds: List[str] = field(default_factory=list)
    filenames: List[str] = field(default_factory=list)
    executable: Optional[Path] = None
    # True when the build tool reused the artifact without recompiling.
    fresh: bool = False

    @property
    def is_executable(self) -> bool:
        return "bin" in self.target_kinds and self.executable is not None


class CoordinatorState(Enum):
    """Where the rebuild loop currently is."""
    IDLE = "idle"
    BUILDING = "building"
    WAITING = "waiting"


class SupervisorState(Enum):
    """Lifecycle of the supervised child process."""
    NOT_STARTED = "not_started"
    RUNNING = "running"
    RESTARTING = "restarting"
    TERMINATED = "terminated"


@dataclass
class RebuildState:
    """
    State owned by the rebuild coordinator.

    `pending` starts out True so the first pass of the loop always builds.
    """

    pending: bool = True
    last_rebuild_time: float = 0.0
    artifacts: ArtifactRecord = field(default_factory=dict)
    build_count: int = 0
    last_build_failed: bool = False

"""
Data models for the watchf package.

Configuration Models:
- The root configuration loaded from `watchf.toml`
- Failure policies and supervisor settings

Runtime Models:
- Filesystem change notifications and watch errors
- Build artifact records parsed from the build tool's output
- Coordinator rebuild state and supervisor lifecycle states
"""

from .config import DEFAULT_MESSAGE_FORMAT, PolicyConfig, SupervisorConfig, WatchfConfig

from .runtime import (
    ArtifactRecord,
    BuildArtifact,
    ChangeEvent,
    ChangeKind,
    CoordinatorState,
    RebuildState,
    SupervisorState,
    WatchError,
)

__all__ = [
    # Configuration
    "DEFAULT_MESSAGE_FORMAT",
    "PolicyConfig",
    "SupervisorConfig",
    "WatchfConfig",
    # Runtime
    "ArtifactRecord",
    "BuildArtifact",
    "ChangeEvent",
    "ChangeKind",
    "CoordinatorState",
    "RebuildState",
    "SupervisorState",
    "WatchError",
]

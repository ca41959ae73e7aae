"""
watchf: rebuild on change, restart on rebuild.

This package watches source files, reruns a build command when they change,
reads the executables the build produced from its JSON output and, in run
mode, restarts a long-lived program after every successful build.

The package is organized into specialized modules:
- config: Configuration loading and validation
- models: Data structures and type definitions
- validation: Exceptions, error handling and value validation
- system: Subprocess primitives
- executor: Build invocation and artifact extraction
- classification: Deciding which changes warrant a rebuild
- orchestration: Rebuild loop, process supervision, watching and signals
- cli: Command-line interface

Usage:
    From command line:
        watchf -c watchf.toml run

    Programmatically:
        import queue
        from watchf import RebuildCoordinator, get_config
        coordinator = RebuildCoordinator(get_config(), queue.Queue())
        coordinator.rebuild()
"""

__version__ = "0.1.0"

from .config import clear_config_cache, get_config, set_config_path
from .executor import build
from .classification import should_rebuild
from .models import ChangeEvent, ChangeKind, WatchfConfig
from .orchestration import ProcessSupervisor, RebuildCoordinator

__all__ = [
    "__version__",
    "build",
    "clear_config_cache",
    "get_config",
    "set_config_path",
    "should_rebuild",
    "ChangeEvent",
    "ChangeKind",
    "WatchfConfig",
    "ProcessSupervisor",
    "RebuildCoordinator",
]

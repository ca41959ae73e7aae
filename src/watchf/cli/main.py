"""
Command-line interface for watchf.

This module provides the `watchf` entry point. It parses arguments, loads
the configuration, starts the filesystem watcher and, in run mode, the
process supervisor, then hands control to the rebuild loop until the build
fails fatally or the user interrupts it.

Usage:
    watchf [-c CONFIG_PATH] [--log-level LEVEL] {build,run}

Example:
    watchf -c watchf.toml run
"""

import argparse
import logging
import queue
import sys
import tomllib
from pathlib import Path
from typing import List, Optional

from .. import __version__
from ..config import DEFAULT_CONFIG_PATH, get_config, set_config_path
from ..models.config import WatchfConfig
from ..orchestration import (
    ProcessSupervisor,
    RebuildCoordinator,
    SignalHandler,
    TimeoutConstants,
    start_watching,
)
from ..validation import (
    BuildError,
    ErrorSeverity,
    ShutdownRequested,
    SupervisorError,
    ValidationError,
    WatchSetupError,
    handle_cli_error,
    handle_error,
)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Log to stderr so the supervised program keeps stdout to itself."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="watchf",
        description="Rebuild when watched files change and restart the built program.",
    )
    parser.add_argument(
        "-c",
        "--config-path",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to the configuration file (default: {DEFAULT_CONFIG_PATH}).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging verbosity (default: INFO).",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("build", help="Build using the configured build command")
    subparsers.add_parser("run", help="Build, then run and restart the configured run command")
    return parser


def run_session(config: WatchfConfig, supervise: bool) -> int:
    """
    Run one watch session until it ends.

    Args:
        config: Validated configuration
        supervise: Whether to run and restart the run command

    Returns:
        Process exit status: 0 after a requested shutdown, 1 on a fatal error
    """
    events: queue.Queue = queue.Queue()
    signal_handler = SignalHandler()
    signal_handler.setup_signal_handlers()
    observer = None
    supervisor = None

    try:
        observer = start_watching(config.watch, events)
        if supervise:
            supervisor = ProcessSupervisor.from_config(config)
            supervisor.start()
        RebuildCoordinator(config, events, supervisor=supervisor).run()
        return 0
    except ShutdownRequested:
        return 0
    except (BuildError, SupervisorError, WatchSetupError) as e:
        signal_handler.shutdown_requested.set()
        handle_error(
            error=e,
            context="watch session",
            severity=ErrorSeverity.ERROR,
            reraise=False,
            logger=logger,
        )
        return 1
    finally:
        # Later signals only warn, so teardown always reaches the supervisor.
        signal_handler.shutdown_requested.set()
        if observer is not None:
            observer.stop()
            observer.join(TimeoutConstants.OBSERVER_JOIN_TIMEOUT)
        if supervisor is not None:
            supervisor.stop()
        signal_handler.cleanup_signal_handlers()
        logger.info("Watch session ended")


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line interface for watchf.

    Raises:
        SystemExit: Always, with the session's exit status.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    set_config_path(args.config_path)
    try:
        config = get_config()
    except (OSError, UnicodeDecodeError, ValidationError, tomllib.TOMLDecodeError) as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            logger=logger,
        )

    sys.exit(run_session(config, supervise=args.command == "run"))


if __name__ == "__main__":
    main_cli()

"""
Filesystem watching.

This module bridges watchdog's observer threads to the coordinator's event
queue. Every watchdog event is translated into a ChangeEvent and queued in
arrival order; the coordinator decides what matters.
"""

import logging
import os
import queue
from pathlib import Path
from typing import Iterable

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver

from ..models.runtime import ChangeEvent, ChangeKind, WatchError
from ..validation import WatchSetupError

logger = logging.getLogger(__name__)

_KIND_BY_EVENT_TYPE = {
    EVENT_TYPE_CREATED: ChangeKind.CREATE,
    EVENT_TYPE_MODIFIED: ChangeKind.MODIFY,
    EVENT_TYPE_DELETED: ChangeKind.REMOVE,
}


def to_change_event(event: FileSystemEvent) -> ChangeEvent:
    """Translate a watchdog event; moves carry both source and destination."""
    kind = _KIND_BY_EVENT_TYPE.get(event.event_type, ChangeKind.OTHER)
    raw_paths = [event.src_path]
    dest_path = getattr(event, "dest_path", "")
    if dest_path:
        raw_paths.append(dest_path)
    return ChangeEvent(kind=kind, paths=tuple(Path(os.fsdecode(p)) for p in raw_paths))


class WatchEventHandler(FileSystemEventHandler):
    """Queues every filesystem event for the rebuild coordinator."""

    def __init__(self, events: queue.Queue):
        super().__init__()
        self.events = events

    def on_any_event(self, event: FileSystemEvent) -> None:
        try:
            change = to_change_event(event)
        except Exception as e:
            self.events.put(WatchError(e))
            return
        self.events.put(change)


def start_watching(targets: Iterable[Path], events: queue.Queue) -> BaseObserver:
    """
    Watch every target recursively and start delivering events.

    Args:
        targets: Files and directories to watch
        events: Queue receiving ChangeEvent and WatchError items

    Returns:
        The running observer; the caller stops and joins it

    Raises:
        WatchSetupError: If a target cannot be watched
    """
    observer = Observer()
    handler = WatchEventHandler(events)
    for target in targets:
        try:
            observer.schedule(handler, str(target), recursive=True)
        except OSError as e:
            raise WatchSetupError(f"cannot watch {target}: {e}") from e
        logger.info(f"Watching {target}")

    try:
        observer.start()
    except OSError as e:
        raise WatchSetupError(f"cannot start filesystem watcher: {e}") from e
    return observer

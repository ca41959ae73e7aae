"""
Change classification.

This module decides whether a filesystem change notification warrants a
rebuild by comparing the changed paths' modification times against the last
rebuild and the known artifact timestamps.
"""

import logging
import os
from pathlib import Path
from typing import Iterator, Mapping, Optional

from ..models.runtime import ChangeEvent, ChangeKind

logger = logging.getLogger(__name__)


def read_mtime(path: Path) -> Optional[float]:
    """Return the modification time of ``path``, or None if it cannot be read.

    Editors that save atomically delete and recreate files, so a path from an
    event may briefly not exist.
    """
    try:
        return os.stat(path).st_mtime
    except OSError as e:
        logger.debug(f"Skipping {path}: {e}")
        return None


def _event_mtimes(event: ChangeEvent) -> Iterator[float]:
    # Removal is not evidence of a finished edit.
    if event.kind is ChangeKind.REMOVE:
        return
    for path in event.paths:
        mtime = read_mtime(path)
        if mtime is not None:
            yield mtime


def should_rebuild(
    event: ChangeEvent,
    artifact_timestamps: Mapping[Path, float],
    last_rebuild_time: float,
) -> bool:
    """Classify a change event.

    A path qualifies when it was modified after the last rebuild started and
    after at least one known artifact was written. The first qualifying path
    decides; with no known artifacts nothing qualifies.

    Args:
        event: The change notification to classify.
        artifact_timestamps: Artifact path to last observed mtime.
        last_rebuild_time: When the most recent rebuild attempt started.

    Returns:
        True if a rebuild is warranted.

    Examples:
        >>> should_rebuild(ChangeEvent(ChangeKind.REMOVE, (Path("a.rs"),)), {}, 0.0)
        False
    """
    for mtime in _event_mtimes(event):
        if mtime > last_rebuild_time and any(mtime > t for t in artifact_timestamps.values()):
            return True
    return False


def is_newer_than(event: ChangeEvent, since: float) -> bool:
    """Return True if any path in a non-removal event was modified after ``since``."""
    return any(mtime > since for mtime in _event_mtimes(event))

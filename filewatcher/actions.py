"""Kinds of file system change reported by the watcher."""

from __future__ import annotations

from enum import Enum

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
)

__all__ = ["FileAction"]


class FileAction(Enum):
    """A file system action detected in a watched location."""

    ADD = 1
    """A new file or directory was created."""

    DELETE = 2
    """A file or directory was deleted."""

    MODIFIED = 3
    """A file or directory was modified."""

    MOVED = 4
    """A file or directory was moved or renamed."""

    @classmethod
    def from_event_type(cls, event_type: str) -> FileAction:
        """Map a watchdog event type to an action.

        Unknown event types are reported as ``MODIFIED``.
        """
        return _EVENT_TYPES.get(event_type, cls.MODIFIED)


_EVENT_TYPES = {
    EVENT_TYPE_CREATED: FileAction.ADD,
    EVENT_TYPE_DELETED: FileAction.DELETE,
    EVENT_TYPE_MODIFIED: FileAction.MODIFIED,
    EVENT_TYPE_MOVED: FileAction.MOVED,
}
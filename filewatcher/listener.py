"""Interface for receivers of file system change notifications."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from filewatcher.actions import FileAction

__all__ = ["FileWatcherListener"]


class FileWatcherListener(ABC):
    """Receives a callback whenever a watched file or directory changes."""

    @abstractmethod
    def file_action_performed(
        self, file: Path, old_file: Path | None, action: FileAction
    ) -> None:
        """Handle a detected action.

        ``file`` is the affected path. ``old_file`` is the previous location
        for moves and ``None`` for every other action.
        """
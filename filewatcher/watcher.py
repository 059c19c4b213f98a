"""Watches a file or directory and reports changes to listeners."""

from __future__ import annotations

import errno
import os
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from filewatcher.actions import FileAction
from filewatcher.listener import FileWatcherListener

__all__ = ["FileWatcher"]

ChangeCallback = Callable[["FileWatcher"], None]

_REPORTED_EVENTS = frozenset(
    {EVENT_TYPE_CREATED, EVENT_TYPE_DELETED, EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED}
)


@dataclass(frozen=True)
class _PendingFileAction:
    file: Path
    old_file: Path | None
    action: FileAction


class _EventHandler(FileSystemEventHandler):
    """Forwards watchdog events to a watcher, optionally for a single file only."""

    def __init__(self, watcher: FileWatcher, only: Path | None) -> None:
        super().__init__()
        self._watcher = watcher
        self._only = only
        self.active = True

    def on_any_event(self, event: FileSystemEvent) -> None:
        if not self.active or event.event_type not in _REPORTED_EVENTS:
            return
        src = Path(os.fsdecode(event.src_path))
        dest = None
        if event.event_type == EVENT_TYPE_MOVED:
            dest = Path(os.fsdecode(event.dest_path))
        if self._only is not None and self._only not in (src, dest):
            return
        action = FileAction.from_event_type(event.event_type)
        if dest is None:
            self._watcher._dispatch(src, None, action)
        else:
            self._watcher._dispatch(dest, src, action)


class FileWatcher:
    """Monitors a file or directory and notifies registered listeners.

    In synchronous mode listeners are called from the observer thread as
    events arrive. In asynchronous mode events are queued and delivered when
    the owning thread calls :meth:`handle_async_update`, typically from its
    event loop while :attr:`has_pending_update` is true.
    """

    def __init__(self) -> None:
        self._observer: Observer | None = None
        self._watch = None
        self._handler: _EventHandler | None = None
        self._watched_path: Path | None = None
        self._use_async = False
        self._listeners: list[FileWatcherListener] = []
        self._change_listeners: list[ChangeCallback] = []
        self._pending: list[_PendingFileAction] = []
        self._update_pending = False
        self._pending_lock = threading.Lock()
        self._listeners_lock = threading.RLock()
        self._state_lock = threading.RLock()

    def start_watching(
        self, path: str | os.PathLike[str], use_async: bool = False, recursive: bool = True
    ) -> None:
        """Start watching ``path``, replacing any previous watch.

        ``recursive`` applies to directories only; a single file is watched
        through its parent directory with events filtered to that file.
        Raises FileNotFoundError if the path does not exist.
        """
        with self._state_lock:
            self.stop_watching()

            target = Path(path).absolute()
            if not target.exists():
                raise FileNotFoundError(
                    errno.ENOENT, "cannot watch a path that does not exist", str(target)
                )

            self._watched_path = target
            self._use_async = use_async

            if target.is_dir():
                directory, only = target, None
            else:
                directory, only = target.parent, target
                recursive = False

            handler = _EventHandler(self, only)
            try:
                observer = self._ensure_observer()
                self._watch = observer.schedule(handler, str(directory), recursive=recursive)
            except Exception:
                self._watched_path = None
                raise
            self._handler = handler

    def stop_watching(self) -> None:
        """Stop watching and discard any notifications not yet delivered."""
        with self._state_lock:
            if self._handler is not None:
                self._handler.active = False
                self._handler = None
            if self._watch is not None:
                if self._observer is not None:
                    self._observer.unschedule(self._watch)
                self._watch = None

            self._watched_path = None

            with self._pending_lock:
                self._pending.clear()
                self._update_pending = False

    @property
    def is_watching(self) -> bool:
        """Whether a file or directory is currently being watched."""
        return self._watch is not None

    @property
    def watched_path(self) -> Path | None:
        """The watched file or directory, or ``None`` when not watching."""
        return self._watched_path

    @property
    def has_pending_update(self) -> bool:
        """Whether queued actions are waiting for :meth:`handle_async_update`."""
        with self._pending_lock:
            return self._update_pending

    def add_listener(self, listener: FileWatcherListener) -> None:
        """Register a listener; adding the same listener twice has no effect."""
        if listener is None:
            raise ValueError("listener must not be None")
        with self._listeners_lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove_listener(self, listener: FileWatcherListener) -> None:
        """Unregister a listener; unknown listeners are ignored."""
        with self._listeners_lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def add_change_listener(self, callback: ChangeCallback) -> None:
        """Register a callable invoked with this watcher after every notification."""
        with self._listeners_lock:
            if callback not in self._change_listeners:
                self._change_listeners.append(callback)

    def remove_change_listener(self, callback: ChangeCallback) -> None:
        """Unregister a change callback; unknown callbacks are ignored."""
        with self._listeners_lock:
            if callback in self._change_listeners:
                self._change_listeners.remove(callback)

    def handle_file_action(
        self,
        directory: str | os.PathLike[str],
        filename: str,
        action: FileAction | str,
        old_filename: str = "",
    ) -> None:
        """Report an action on ``filename`` inside ``directory``.

        ``action`` may be a FileAction or a watchdog event type. A non-empty
        ``old_filename`` names the previous location within the same directory.
        """
        base = Path(directory)
        file = base / filename
        old_file = base / old_filename if old_filename else None
        if not isinstance(action, FileAction):
            action = FileAction.from_event_type(action)
        self._dispatch(file, old_file, action)

    def handle_async_update(self) -> None:
        """Deliver all queued actions to the listeners, in arrival order."""
        with self._listeners_lock:
            with self._pending_lock:
                to_process, self._pending = self._pending, []
                self._update_pending = False
            for pending in to_process:
                self._notify(pending.file, pending.old_file, pending.action)

    def close(self) -> None:
        """Stop watching and shut down the background observer."""
        with self._state_lock:
            self.stop_watching()
            if self._observer is not None:
                self._observer.stop()
                self._observer.join()
                self._observer = None

    def __enter__(self) -> FileWatcher:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _ensure_observer(self) -> Observer:
        if self._observer is None:
            observer = Observer()
            observer.daemon = True
            observer.start()
            self._observer = observer
        return self._observer

    def _dispatch(self, file: Path, old_file: Path | None, action: FileAction) -> None:
        if self._use_async:
            with self._pending_lock:
                self._pending.append(_PendingFileAction(file, old_file, action))
                self._update_pending = True
        else:
            self._notify(file, old_file, action)

    def _notify(self, file: Path, old_file: Path | None, action: FileAction) -> None:
        with self._listeners_lock:
            for listener in tuple(self._listeners):
                if listener in self._listeners:
                    listener.file_action_performed(file, old_file, action)
            for callback in tuple(self._change_listeners):
                if callback in self._change_listeners:
                    callback(self)
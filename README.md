# filewatcher

Watch a file or a directory for changes and notify listeners. When something is
added, deleted, modified or moved, every registered listener is told which path
changed and what happened to it. Monitoring runs on a background
[watchdog](https://pypi.org/project/watchdog/) observer thread.

## Installation

```
pip install filewatcher
```

## Usage

Write a listener by subclassing `filewatcher.listener.FileWatcherListener` and
implementing `file_action_performed(file, old_file, action)`:

```python
from filewatcher.actions import FileAction
from filewatcher.listener import FileWatcherListener


class PrintingListener(FileWatcherListener):
    def file_action_performed(self, file, old_file, action):
        if action is FileAction.MOVED:
            print(f"{old_file} -> {file}")
        else:
            print(f"{action.name}: {file}")
```

`file` is a `pathlib.Path`. `old_file` is the previous location for a move and
`None` for every other action.

Register the listener with a `filewatcher.watcher.FileWatcher` and start
watching:

```python
from pathlib import Path
from filewatcher.watcher import FileWatcher

with FileWatcher() as watcher:
    watcher.add_listener(PrintingListener())
    watcher.start_watching(Path("some/directory"), use_async=False, recursive=True)
    ...  # listeners are called as changes happen
```

- `start_watching(path, use_async=False, recursive=True)` replaces any watch
  that is already running. It raises `FileNotFoundError` if the path does not
  exist. A directory is watched recursively unless `recursive=False`. A single
  file is watched through its parent directory, and only events that involve
  that file are reported; `recursive` is ignored for files.
- `stop_watching()` ends the watch and discards notifications not yet
  delivered.
- `close()` stops watching and shuts down the background observer. Leaving the
  `with` block calls `close()`.

### Immediate and deferred notification

- With `use_async=False`, listeners are called straight away on the observer
  thread that detects the change.
- With `use_async=True`, changes are queued. The `has_pending_update` property
  is true while changes are waiting. Call `handle_async_update()` from your own
  thread or event loop to deliver them to the listeners in arrival order.

### Listeners and change callbacks

- `add_listener(listener)` registers a `FileWatcherListener`; adding the same
  listener twice has no effect and passing `None` raises `ValueError`.
  `remove_listener(listener)` unregisters it and ignores unknown listeners.
- `add_change_listener(callback)` registers a plain callable that is called
  with the watcher after each notification has gone to the listeners.
  `remove_change_listener(callback)` unregisters it.

### Reporting actions yourself

`handle_file_action(directory, filename, action, old_filename="")` feeds an
action into the watcher as if it had been detected: the path is
`directory / filename`, a non-empty `old_filename` gives the previous path in
the same directory, and `action` is a `FileAction` or a watchdog event type
name. It is delivered immediately or queued, following the current mode.

### Inspecting state

- `is_watching` (a property) is true while a watch is active.
- `watched_path` (a property) is the absolute path being watched, or `None`.

### Actions

`filewatcher.actions.FileAction` has four members: `ADD`, `DELETE`, `MODIFIED`
and `MOVED`. `FileAction.from_event_type(event_type)` maps a watchdog event
type (`"created"`, `"deleted"`, `"modified"`, `"moved"`) to a member; any other
event type maps to `MODIFIED`.

## What it does not do

This is a library only: there is no command-line program. Deferred
notifications are not delivered on their own; your code must call
`handle_async_update()`.
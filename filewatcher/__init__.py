"""Watch files and directories for changes and notify listeners."""

__version__ = "1.0.0"
__all__ = ["actions", "listener", "watcher"]
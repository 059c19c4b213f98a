import threading

import pytest

from filewatcher.actions import FileAction
from filewatcher.listener import FileWatcherListener
from filewatcher.watcher import FileWatcher


class _Recorder(FileWatcherListener):
    def __init__(self):
        self.calls = []

    def file_action_performed(self, file, old_file, action):
        self.calls.append((file, old_file, action))


@pytest.fixture
def watcher():
    w = FileWatcher()
    yield w
    w.close()


def test_initially_not_watching(watcher):
    assert watcher.is_watching is False
    assert watcher.watched_path is None
    assert watcher.has_pending_update is False


def test_start_and_stop_directory(watcher, tmp_path):
    watcher.start_watching(tmp_path)
    assert watcher.is_watching is True
    assert watcher.watched_path == tmp_path.absolute()
    watcher.stop_watching()
    assert watcher.is_watching is False
    assert watcher.watched_path is None


def test_start_on_single_file(watcher, tmp_path):
    target = tmp_path / "single.txt"
    target.write_text("x")
    watcher.start_watching(target)
    assert watcher.is_watching is True
    assert watcher.watched_path == target.absolute()


def test_missing_path_raises(watcher, tmp_path):
    with pytest.raises(FileNotFoundError):
        watcher.start_watching(tmp_path / "missing")
    assert watcher.is_watching is False
    assert watcher.watched_path is None


def test_restart_replaces_previous_watch(watcher, tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    watcher.start_watching(first)
    watcher.start_watching(second)
    assert watcher.watched_path == second.absolute()
    assert watcher.is_watching is True


def test_sync_action_notifies_immediately(watcher, tmp_path):
    recorder = _Recorder()
    watcher.add_listener(recorder)
    watcher.start_watching(tmp_path)
    watcher.handle_file_action(tmp_path, "a.txt", FileAction.ADD)
    assert recorder.calls == [(tmp_path / "a.txt", None, FileAction.ADD)]


def test_move_reports_old_file(watcher, tmp_path):
    recorder = _Recorder()
    watcher.add_listener(recorder)
    watcher.handle_file_action(tmp_path, "new.txt", FileAction.MOVED, "old.txt")
    assert recorder.calls == [(tmp_path / "new.txt", tmp_path / "old.txt", FileAction.MOVED)]


def test_event_type_string_is_converted(watcher, tmp_path):
    recorder = _Recorder()
    watcher.add_listener(recorder)
    watcher.handle_file_action(tmp_path, "gone.txt", "deleted")
    watcher.handle_file_action(tmp_path, "odd.txt", "closed")
    assert [call[2] for call in recorder.calls] == [FileAction.DELETE, FileAction.MODIFIED]


def test_async_mode_queues_until_update(watcher, tmp_path):
    recorder = _Recorder()
    watcher.add_listener(recorder)
    watcher.start_watching(tmp_path, use_async=True)
    watcher.handle_file_action(tmp_path, "a.txt", FileAction.ADD)
    watcher.handle_file_action(tmp_path, "a.txt", FileAction.MODIFIED)
    assert recorder.calls == []
    assert watcher.has_pending_update is True

    watcher.handle_async_update()
    assert [call[2] for call in recorder.calls] == [FileAction.ADD, FileAction.MODIFIED]
    assert watcher.has_pending_update is False

    watcher.handle_async_update()
    assert len(recorder.calls) == 2


def test_stop_discards_pending_actions(watcher, tmp_path):
    recorder = _Recorder()
    watcher.add_listener(recorder)
    watcher.start_watching(tmp_path, use_async=True)
    watcher.handle_file_action(tmp_path, "a.txt", FileAction.ADD)
    watcher.stop_watching()
    assert watcher.has_pending_update is False
    watcher.handle_async_update()
    assert recorder.calls == []


def test_duplicate_listener_called_once(watcher, tmp_path):
    recorder = _Recorder()
    watcher.add_listener(recorder)
    watcher.add_listener(recorder)
    watcher.handle_file_action(tmp_path, "a.txt", FileAction.ADD)
    assert len(recorder.calls) == 1


def test_removed_listener_not_called(watcher, tmp_path):
    kept = _Recorder()
    removed = _Recorder()
    watcher.add_listener(kept)
    watcher.add_listener(removed)
    watcher.remove_listener(removed)
    watcher.remove_listener(removed)
    watcher.handle_file_action(tmp_path, "a.txt", FileAction.ADD)
    assert len(kept.calls) == 1
    assert removed.calls == []


def test_none_listener_rejected(watcher):
    with pytest.raises(ValueError):
        watcher.add_listener(None)


def test_change_listener_receives_watcher(watcher, tmp_path):
    seen = []
    watcher.add_change_listener(seen.append)
    watcher.handle_file_action(tmp_path, "a.txt", FileAction.ADD)
    assert seen == [watcher]
    watcher.remove_change_listener(seen.append)
    watcher.handle_file_action(tmp_path, "a.txt", FileAction.ADD)
    assert seen == [watcher]


def test_context_manager_closes(tmp_path):
    with FileWatcher() as w:
        w.start_watching(tmp_path)
        assert w.is_watching is True
    assert w.is_watching is False
    assert w.watched_path is None


def test_can_watch_again_after_close(tmp_path):
    w = FileWatcher()
    w.start_watching(tmp_path)
    w.close()
    w.start_watching(tmp_path)
    try:
        assert w.is_watching is True
    finally:
        w.close()


def test_real_file_creation_is_reported(watcher, tmp_path):
    target = tmp_path / "created.txt"
    seen = threading.Event()
    lock = threading.Lock()
    calls = []

    class Waiter(FileWatcherListener):
        def file_action_performed(self, file, old_file, action):
            with lock:
                calls.append((file, action))
            if file == target.absolute() and action is FileAction.ADD:
                seen.set()

    watcher.add_listener(Waiter())
    watcher.start_watching(tmp_path)
    target.write_text("hello")
    seen.wait(10)
    with lock:
        reported = list(calls)
    assert (target.absolute(), FileAction.ADD) in reported
"""Tests for the polling log watcher."""

from unittest.mock import Mock

import pytest
from twisted.internet import task

from onlinestats.watcher import LogWatcher


@pytest.fixture
def clock():
    return task.Clock()


@pytest.fixture
def logfile(tmp_path):
    path = tmp_path / "latest.log"
    path.write_text("first line\n")
    return path


def append(path, text):
    with path.open("a") as handle:
        handle.write(text)


def start(path, clock, callback=None):
    watcher = LogWatcher(str(path), callback or Mock(), interval=1.0, clock=clock)
    watcher.start()
    return watcher


def test_no_change_no_callback(logfile, clock):
    watcher = start(logfile, clock)
    clock.advance(1)
    clock.advance(1)
    assert watcher.callback.call_count == 0


def test_change_calls_back(logfile, clock):
    watcher = start(logfile, clock)
    append(logfile, "second line\n")
    clock.advance(1)
    assert watcher.callback.call_count == 1
    clock.advance(1)
    assert watcher.callback.call_count == 1


def test_writes_between_polls_coalesce(logfile, clock):
    watcher = start(logfile, clock)
    append(logfile, "a\n")
    append(logfile, "b\n")
    clock.advance(1)
    assert watcher.callback.call_count == 1


def test_file_created_later(tmp_path, clock):
    path = tmp_path / "latest.log"
    watcher = start(path, clock)
    clock.advance(1)
    assert watcher.callback.call_count == 0
    path.write_text("hello\n")
    clock.advance(1)
    assert watcher.callback.call_count == 1


def test_file_removed(logfile, clock):
    watcher = start(logfile, clock)
    logfile.unlink()
    clock.advance(1)
    assert watcher.callback.call_count == 0
    logfile.write_text("rotated\n")
    clock.advance(1)
    assert watcher.callback.call_count == 1


def test_callback_errors_keep_polling(logfile, clock):
    watcher = start(logfile, clock, Mock(side_effect=RuntimeError("boom")))
    append(logfile, "a\n")
    clock.advance(1)
    append(logfile, "b\n")
    clock.advance(1)
    assert watcher.callback.call_count == 2
    assert watcher.looping_call.running


def test_stop(logfile, clock):
    watcher = start(logfile, clock)
    watcher.stop()
    watcher.stop()
    append(logfile, "a\n")
    clock.advance(1)
    assert watcher.callback.call_count == 0
    assert not watcher.looping_call.running

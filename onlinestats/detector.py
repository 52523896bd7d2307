"""Spot /who results in the client log.

Every time the log changes we look at its last non-blank line.  A line is
only ever handled once: repeated notifications for the same content are
ignored, whether or not the line was a /who result.
"""

import re
import threading

from twisted.python import filepath, log

# the server answers /who with "ONLINE: name, name, ..." in chat
RE_ONLINE = re.compile(r'\[CHAT\] ONLINE: (.*)')
NAME_SEPARATOR = ", "


class LastLineState:
    """The last line we have seen, shared between notifications."""

    def __init__(self):
        self._lock = threading.Lock()
        self._line = ""

    @property
    def line(self):
        with self._lock:
            return self._line

    def swap(self, line):
        """Store ``line`` and return True, unless it is already stored."""
        with self._lock:
            if line == self._line:
                return False
            self._line = line
            return True


def last_line(text):
    for line in reversed(text.splitlines()):
        if line.strip():
            return line
    return ""


def parse_online(line):
    """Names listed by a /who line, or None if ``line`` isn't one."""
    match = RE_ONLINE.search(line)
    if match is None:
        return None
    return [name for name in match.group(1).split(NAME_SEPARATOR) if name]


class EventDetector:
    def __init__(self, path, dispatch, state=None):
        self.path = filepath.FilePath(path)
        self.dispatch = dispatch
        self.state = state or LastLineState()

    def fileModified(self):
        try:
            text = self.path.getContent().decode("utf-8", errors="replace")
        except (IOError, OSError) as e:
            log.msg(f"Error reading log {self.path.path}: {e}")
            return

        line = last_line(text)
        log.msg(f"Last line: {line}")
        if not self.state.swap(line):
            return

        names = parse_online(line)
        if names is None:
            return
        log.msg("/who has been executed")
        log.msg(f"Names: {names}")
        try:
            self.dispatch(names)
        except Exception:
            log.err(None, "Error dispatching online players")

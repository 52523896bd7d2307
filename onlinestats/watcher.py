"""Poll a file and call back when it changes.

The file is stat'ed on a LoopingCall; a change in modification time or size
counts as a modification.  Several writes between two polls produce a single
callback.
"""

from twisted.internet import reactor, task
from twisted.python import filepath, log

POLL_INTERVAL = 1.0  # seconds between log file checks


class LogWatcher:
    def __init__(self, path, callback, interval=POLL_INTERVAL, clock=None):
        self.path = filepath.FilePath(path)
        self.callback = callback
        self.interval = interval
        self.signature = None
        self.looping_call = task.LoopingCall(self.check)
        self.looping_call.clock = clock or reactor

    def stat(self):
        # both values come from this one stat
        try:
            self.path.restat()
        except (IOError, OSError):
            return None
        return (self.path.getModificationTime(), self.path.getsize())

    def start(self):
        log.msg(f"Watching log path: {self.path.path}")
        self.signature = self.stat()
        return self.looping_call.start(self.interval, now=False)

    def stop(self):
        if self.looping_call.running:
            self.looping_call.stop()

    def check(self):
        signature = self.stat()
        if signature == self.signature:
            return
        self.signature = signature
        if signature is None:
            log.msg(f"{self.path.path} has disappeared")
            return
        try:
            self.callback()
        except Exception:
            log.err(None, f"Error handling change to {self.path.path}")

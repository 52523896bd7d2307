#!/usr/bin/env python3
# -*- coding: UTF-8 -*-
"""

*** ONLINESTATS ***

bot.py - watches the Minecraft client log for /who results and prints
         Hypixel Bedwars stats for every player listed

Copyright (c) 2024, the onlinestats authors
All rights reserved.

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are
met:

1. Redistributions of source code must retain the above copyright
notice, this list of conditions and the following disclaimer.

2. Redistributions in binary form must reproduce the above copyright
notice, this list of conditions and the following disclaimer in the
documentation and/or other materials provided with the distribution.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS
IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED
TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A
PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT
HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL,
SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED
TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR
PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS
SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""

from twisted.internet import reactor
from twisted.python import log
import argparse
import sys

import requests

from onlinestats.config import Settings
from onlinestats.detector import EventDetector, LastLineState
from onlinestats.errors import ConfigError
from onlinestats.identity import IdentityResolver
from onlinestats.orchestrator import EnrichmentOrchestrator
from onlinestats.stats import StatsFetcher
from onlinestats.watcher import POLL_INTERVAL, LogWatcher

THREAD_POOL_SIZE = 10  # max concurrent lookups


def positive(kind):
    """argparse type that only accepts numbers greater than zero."""
    def convert(text):
        try:
            value = kind(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid {kind.__name__} value: {text!r}")
        if not 0 < value < float("inf"):
            raise argparse.ArgumentTypeError(f"must be greater than zero: {text!r}")
        return value
    return convert


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="onlinestats",
        description="Print Hypixel stats for the players listed by /who.")
    parser.add_argument("-c", "--config", default=None,
                        help="settings file (default: config.toml, created if missing)")
    parser.add_argument("-i", "--interval", type=positive(float), default=POLL_INTERVAL,
                        help="seconds between log file checks")
    parser.add_argument("--threads", type=positive(int), default=THREAD_POOL_SIZE,
                        help="maximum number of concurrent lookups")
    return parser.parse_args(argv)


def build(settings, interval=POLL_INTERVAL, clock=None):
    """Wire the pipeline together; returns the (unstarted) watcher."""
    session = requests.Session()
    orchestrator = EnrichmentOrchestrator(
        IdentityResolver(session, timeout=settings.timeout),
        StatsFetcher(settings.api_key, session, timeout=settings.timeout))
    detector = EventDetector(settings.log_path, orchestrator.enrich, LastLineState())
    return LogWatcher(settings.log_path, detector.fileModified, interval, clock)


def main(argv=None):
    args = parse_args(argv)
    log.startLogging(sys.stdout)

    try:
        settings = Settings().fetch(args.config)
    except ConfigError as e:
        log.msg(f"Could not load settings: {e}")
        return 1

    reactor.suggestThreadPoolSize(args.threads)
    watcher = build(settings, args.interval)
    reactor.callWhenRunning(watcher.start)
    reactor.addSystemEventTrigger("before", "shutdown", watcher.stop)
    reactor.addSystemEventTrigger("before", "shutdown", log.msg, "Shutting down, closing log watch")

    # run until interrupted
    reactor.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())

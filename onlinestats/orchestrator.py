"""Turn a list of names into player reports.

Network calls block, so they run through an executor that returns a
Deferred; by default that is the reactor thread pool.  Reports are passed
to the sink one by one as their lookups finish, in no particular order.
"""

import sys

from twisted.internet import defer, threads
from twisted.python import log


def print_report(report):
    print(report.dump(), file=sys.stderr)


class EnrichmentOrchestrator:
    def __init__(self, resolver, fetcher, sink=print_report, executor=threads.deferToThread):
        self.resolver = resolver
        self.fetcher = fetcher
        self.sink = sink
        self.executor = executor

    def enrich(self, names):
        """Resolve ``names`` and report on each player.

        The returned Deferred fires with None once every report has been
        emitted or skipped.  It never fails: errors are logged here.
        """
        log.msg("Getting player uuids")
        d = self.executor(self.resolver.resolve, list(names))
        d.addCallbacks(self._fetchAll, self._resolveFailed)
        return d

    def _resolveFailed(self, failure):
        log.err(failure, "Error while getting player uuids")

    def _fetchAll(self, players):
        if not players:
            log.msg("No players resolved")
            return None
        fetches = []
        for uuid, name in players.items():
            log.msg(f"UUID for {name}: {uuid}")
            d = self.executor(self.fetcher.fetch, uuid)
            d.addCallbacks(self._report, self._fetchFailed,
                           errbackArgs=(name, uuid))
            fetches.append(d)
        d = defer.DeferredList(fetches, consumeErrors=True)
        d.addCallback(lambda _: None)
        return d

    def _report(self, report):
        try:
            self.sink(report)
        except Exception:
            log.err(None, f"Error reporting {report.name}")

    def _fetchFailed(self, failure, name, uuid):
        log.err(failure, f"Error while getting data from hypixel for {name} ({uuid})")

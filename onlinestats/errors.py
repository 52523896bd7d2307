"""Exceptions raised by the online-player pipeline.

Only ConfigError is fatal, at startup.  Everything else is caught by the
detector or the orchestrator, logged, and limited to the event that
triggered it.
"""


class OnlineStatsError(Exception):
    """Base class for everything raised by onlinestats."""


class ConfigError(OnlineStatsError):
    """The settings file could not be created, read or parsed."""


class TransportError(OnlineStatsError):
    """A request never got an HTTP response (DNS, refused, timeout...)."""

    def __init__(self, url, cause):
        self.url = url
        self.cause = cause
        OnlineStatsError.__init__(self, f"request to {url} failed: {cause}")


class RemoteServiceError(OnlineStatsError):
    """The stats service answered with a non-success status."""

    def __init__(self, status, body):
        self.status = status
        self.body = body
        OnlineStatsError.__init__(self, f"remote service returned {status}: {body}")


class DeserializationError(OnlineStatsError):
    """A success response did not have the shape we expect."""

    def __init__(self, message, body=None):
        self.body = body
        OnlineStatsError.__init__(self, message)


class PlayerNotFound(OnlineStatsError):
    """The stats service has no player for this uuid."""

    def __init__(self, uuid):
        self.uuid = uuid
        OnlineStatsError.__init__(self, f"no player found for {uuid}")

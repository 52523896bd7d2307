"""Helpers shared by the clients of the profile and stats services."""

from onlinestats.errors import DeserializationError

DEFAULT_TIMEOUT = 10


def is_success(r):
    return 200 <= r.status_code < 300


def decode_json(r):
    try:
        return r.json()
    except ValueError as e:
        raise DeserializationError(f"invalid JSON from {r.url}: {e}", r.text)

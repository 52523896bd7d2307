"""Resolve player names to uuids.

Names are looked up in batches of ten against the Mojang bulk profile
endpoint.  When a batch is refused (or never gets an answer) every name in
it is retried on its own against the minetools.eu mirror; names the mirror
can't resolve either are dropped without complaint.
"""

import requests
from more_itertools import chunked
from twisted.python import log

from onlinestats.errors import DeserializationError
from onlinestats.http import DEFAULT_TIMEOUT, decode_json, is_success

MOJANG_BULK_URL = "https://api.minecraftservices.com/minecraft/profile/lookup/bulk/byname"
MINETOOLS_UUID_URL = "https://api.minetools.eu/uuid/{}"
BATCH_SIZE = 10


def _profile(record):
    name = record.get("name") if isinstance(record, dict) else None
    uuid = record.get("id") if isinstance(record, dict) else None
    if not isinstance(name, str) or not isinstance(uuid, str):
        return None
    return uuid, name


class IdentityResolver:
    def __init__(self, session=None, timeout=DEFAULT_TIMEOUT,
                 bulk_url=MOJANG_BULK_URL, fallback_url=MINETOOLS_UUID_URL):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.bulk_url = bulk_url
        self.fallback_url = fallback_url

    def resolve(self, names):
        """Return {uuid: name} for every name we could resolve.

        Raises DeserializationError when a service claims success but sends
        something that isn't a profile; batches after that one are not
        attempted.
        """
        players = {}
        for batch in chunked(names, BATCH_SIZE):
            try:
                r = self.session.post(self.bulk_url, json=batch,
                                      headers={"content-type": "application/json"},
                                      timeout=self.timeout)
            except requests.exceptions.RequestException as e:
                log.msg(f"Mojang bulk lookup failed: {e}")
                self.resolveFallback(batch, players)
                continue
            if not is_success(r):
                log.msg(f"Mojang bulk lookup returned status {r.status_code}")
                self.resolveFallback(batch, players)
                continue

            records = decode_json(r)
            if not isinstance(records, list):
                raise DeserializationError(f"expected a list of profiles from {self.bulk_url}", r.text)
            for record in records:
                profile = _profile(record)
                if profile is None:
                    raise DeserializationError(f"malformed profile from {self.bulk_url}: {record!r}", r.text)
                uuid, name = profile
                players[uuid] = name
        return players

    def resolveFallback(self, batch, players):
        """Look up each name of a failed batch individually."""
        log.msg(f"Retrying {len(batch)} names using fallback api (api.minetools.eu)...")
        for name in batch:
            url = self.fallback_url.format(name)
            try:
                r = self.session.get(url, timeout=self.timeout)
            except requests.exceptions.RequestException as e:
                log.msg(f"Skipping {name}: {e}")
                continue
            if not is_success(r):
                log.msg(f"Skipping {name}: fallback returned status {r.status_code}")
                continue
            record = decode_json(r)
            if not isinstance(record, dict):
                raise DeserializationError(f"expected a profile object from {url}", r.text)
            # minetools answers 200 with status ERR and a null id for unknown names
            profile = _profile(record)
            if profile is None or record.get("status") == "ERR":
                log.msg(f"Skipping {name}: not found by fallback api")
                continue
            uuid, found = profile
            players[uuid] = found

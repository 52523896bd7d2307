"""Hypixel player stats for a resolved uuid."""

import uuid as uuidlib

import requests
from twisted.python import log

from onlinestats.errors import (DeserializationError, PlayerNotFound,
                                RemoteServiceError, TransportError)
from onlinestats.http import DEFAULT_TIMEOUT, decode_json, is_success
from onlinestats.models import ApiPlayerData, PlayerReport

HYPIXEL_PLAYER_URL = "https://api.hypixel.net/v2/player"


def hyphenated(player_uuid):
    """Render a uuid (dashed or not) in the 8-4-4-4-12 form."""
    try:
        return str(uuidlib.UUID(player_uuid))
    except (TypeError, ValueError) as e:
        raise DeserializationError(f"invalid uuid {player_uuid!r}: {e}")


class StatsFetcher:
    def __init__(self, api_key, session=None, timeout=DEFAULT_TIMEOUT, url=HYPIXEL_PLAYER_URL):
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout
        self.url = url

    def fetch(self, player_uuid):
        player_uuid = hyphenated(player_uuid)
        log.msg(f"Getting hypixel data for {player_uuid}")
        try:
            r = self.session.get(self.url, params={"uuid": player_uuid},
                                 headers={"API-Key": self.api_key},
                                 timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(self.url, e)

        if not is_success(r):
            raise RemoteServiceError(r.status_code, r.text)

        data = ApiPlayerData.from_json(decode_json(r))
        if data.player is None:
            raise PlayerNotFound(player_uuid)
        return PlayerReport.from_api(data.player, player_uuid)

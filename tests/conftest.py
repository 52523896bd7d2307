from unittest.mock import Mock

import pytest
from twisted.internet import defer


def make_response(status_code=200, json_data=None, text=None, url="https://example.com/"):
    r = Mock()
    r.status_code = status_code
    r.url = url
    if json_data is None and text is not None:
        r.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        r.json.return_value = json_data
    r.text = text if text is not None else repr(json_data)
    return r


@pytest.fixture
def session():
    return Mock()


@pytest.fixture
def sync_executor():
    """Runs the call right away instead of on a thread."""
    return defer.maybeDeferred


@pytest.fixture
def hypixel_player():
    return {
        "displayname": "Technoblade",
        "monthlyPackageRank": "NONE",
        "newPackageRank": "MVP_PLUS",
        "networkExp": 22500,
        "achievements": {"bedwars_level": 312},
        "stats": {
            "Bedwars": {
                "winstreak": 4,
                "final_kills_bedwars": 900,
                "final_deaths_bedwars": 300,
                "wins_bedwars": 150,
                "losses_bedwars": 50,
                "beds_broken_bedwars": 420,
            },
        },
    }

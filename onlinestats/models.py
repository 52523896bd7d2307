"""Player records.

The Api* classes mirror the JSON returned by the Hypixel player endpoint.
Every field the service may leave out is kept as None here; the sentinel
defaults are only filled in by PlayerReport.from_api, so that one function
decides what "unknown" looks like in a report.
"""

import math
from dataclasses import asdict, dataclass
from typing import Optional

from onlinestats.errors import DeserializationError
from onlinestats.levels import f32, f32_repr, network_level

UNKNOWN = -1

# monthlyPackageRank value for players with the monthly subscription rank
SUPERSTAR = "SUPERSTAR"
SUPERSTAR_LABEL = "MVP++"
DEFAULT_RANK = "Default"


def _section(obj, key):
    value = obj.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise DeserializationError(f"expected an object for {key!r}, got {value!r}")
    return value


def _opt_str(obj, key):
    value = obj.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DeserializationError(f"expected a string for {key!r}, got {value!r}")
    return value


def _opt_int(obj, key):
    value = obj.get(key)
    if value is None:
        return None
    # bool is an int subclass, json never means it as a number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DeserializationError(f"expected a number for {key!r}, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise DeserializationError(f"expected a finite number for {key!r}, got {value!r}")
    return int(value)


def _default(value, default=UNKNOWN):
    return default if value is None else value


def ratio(numerator, denominator):
    """Single-precision quotient with IEEE division-by-zero results."""
    numerator = f32(numerator)
    denominator = f32(denominator)
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return f32(numerator / denominator)


@dataclass(frozen=True)
class ApiBedwarsStats:
    winstreak: Optional[int] = None
    final_kills_bedwars: Optional[int] = None
    final_deaths_bedwars: Optional[int] = None
    wins_bedwars: Optional[int] = None
    losses_bedwars: Optional[int] = None
    beds_broken_bedwars: Optional[int] = None

    @classmethod
    def from_json(cls, obj):
        return cls(
            winstreak=_opt_int(obj, "winstreak"),
            final_kills_bedwars=_opt_int(obj, "final_kills_bedwars"),
            final_deaths_bedwars=_opt_int(obj, "final_deaths_bedwars"),
            wins_bedwars=_opt_int(obj, "wins_bedwars"),
            losses_bedwars=_opt_int(obj, "losses_bedwars"),
            beds_broken_bedwars=_opt_int(obj, "beds_broken_bedwars"),
        )


@dataclass(frozen=True)
class ApiStats:
    bedwars: Optional[ApiBedwarsStats] = None

    @classmethod
    def from_json(cls, obj):
        bedwars = _section(obj, "Bedwars")
        return cls(bedwars=ApiBedwarsStats.from_json(bedwars) if bedwars is not None else None)


@dataclass(frozen=True)
class ApiAchievements:
    bedwars_level: Optional[int] = None

    @classmethod
    def from_json(cls, obj):
        return cls(bedwars_level=_opt_int(obj, "bedwars_level"))


@dataclass(frozen=True)
class ApiPlayer:
    name: str
    monthly_package_rank: Optional[str] = None
    new_package_rank: Optional[str] = None
    network_xp: Optional[int] = None
    achievements: Optional[ApiAchievements] = None
    stats: Optional[ApiStats] = None

    @classmethod
    def from_json(cls, obj):
        name = obj.get("displayname")
        if not isinstance(name, str):
            raise DeserializationError(f"player record has no displayname: {name!r}")
        achievements = _section(obj, "achievements")
        stats = _section(obj, "stats")
        return cls(
            name=name,
            monthly_package_rank=_opt_str(obj, "monthlyPackageRank"),
            new_package_rank=_opt_str(obj, "newPackageRank"),
            network_xp=_opt_int(obj, "networkExp"),
            achievements=ApiAchievements.from_json(achievements) if achievements is not None else None,
            stats=ApiStats.from_json(stats) if stats is not None else None,
        )

    @property
    def bedwars(self):
        """Bedwars block, or an all-None one when any level is missing."""
        if self.stats is None or self.stats.bedwars is None:
            return ApiBedwarsStats()
        return self.stats.bedwars


@dataclass(frozen=True)
class ApiPlayerData:
    player: Optional[ApiPlayer] = None

    @classmethod
    def from_json(cls, obj):
        if not isinstance(obj, dict):
            raise DeserializationError(f"expected a JSON object, got {type(obj).__name__}")
        player = _section(obj, "player")
        return cls(player=ApiPlayer.from_json(player) if player is not None else None)


def rank_label(player):
    if player.monthly_package_rank == SUPERSTAR:
        return SUPERSTAR_LABEL
    return _default(player.new_package_rank, DEFAULT_RANK).replace("_PLUS", "+")


@dataclass(frozen=True)
class PlayerReport:
    name: str
    uuid: str
    rank: str
    network_xp: int
    network_level: int
    level: int
    winstreak: int
    fkdr: float
    wlr: float
    final_kills: int
    wins: int
    bed_break: int

    @classmethod
    def from_api(cls, player, uuid):
        bedwars = player.bedwars
        achievements = player.achievements or ApiAchievements()
        final_kills = _default(bedwars.final_kills_bedwars)
        wins = _default(bedwars.wins_bedwars)
        return cls(
            name=player.name,
            uuid=uuid,
            rank=rank_label(player),
            # absent experience is 0 in the report but -1 (level 1) for the level
            network_xp=_default(player.network_xp, 0),
            network_level=network_level(_default(player.network_xp)),
            level=_default(achievements.bedwars_level),
            winstreak=_default(bedwars.winstreak),
            fkdr=ratio(final_kills, _default(bedwars.final_deaths_bedwars)),
            wlr=ratio(wins, _default(bedwars.losses_bedwars)),
            final_kills=final_kills,
            wins=wins,
            bed_break=_default(bedwars.beds_broken_bedwars),
        )

    def dump(self):
        """Multi-line human readable dump, one field per line."""
        lines = ["PlayerReport {"]
        for key, value in asdict(self).items():
            if isinstance(value, str):
                value = f'"{value}"'
            elif isinstance(value, float):
                value = f32_repr(value)
            lines.append(f"    {key}: {value},")
        lines.append("}")
        return "\n".join(lines)

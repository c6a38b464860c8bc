"""
RoundScope Data Contracts

Every record the engine consumes is defined here. Records are immutable
snapshots of what the match/stats service returns; ``from_dict`` accepts the
camelCase JSON produced by the service's proto JSON mapping.

Optional sub-events (first kill, clutch, plant, defuse) are ``None`` when
absent, never empty placeholder objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from roundscope.core.constants import (
    BuyType,
    InvalidMatchDataError,
    Side,
    WinMethod,
)

_MISSING = object()


def _field(data: dict[str, Any], key: str, default: Any = _MISSING) -> Any:
    """Read *key* from a record, raising if it is mandatory and absent."""
    value = data.get(key, default)
    if value is _MISSING:
        raise InvalidMatchDataError(f"Missing required field: {key}")
    return value


# ============================================================
# MATCHES
# ============================================================


@dataclass(frozen=True)
class Match:
    """Header record for one parsed match."""

    id: str
    map_name: str
    date: str  # ISO-8601
    duration_seconds: int
    team_a_name: str
    team_b_name: str
    team_a_score: int
    team_b_score: int
    team_a_started_as: Side = Side.CT
    demo_file_hash: str = ""

    @property
    def total_rounds(self) -> int:
        return self.team_a_score + self.team_b_score

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Match:
        return cls(
            id=str(_field(data, "id")),
            map_name=_field(data, "mapName", ""),
            date=_field(data, "date", ""),
            duration_seconds=int(_field(data, "durationSeconds", 0)),
            team_a_name=_field(data, "teamAName", ""),
            team_b_name=_field(data, "teamBName", ""),
            team_a_score=int(_field(data, "teamAScore")),
            team_b_score=int(_field(data, "teamBScore")),
            team_a_started_as=Side.parse(_field(data, "teamAStartedAs")),
            demo_file_hash=_field(data, "demoFileHash", ""),
        )


@dataclass(frozen=True)
class Player:
    """Roster entry attached to a match."""

    player_id: str
    name: str
    team: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Player:
        return cls(
            player_id=str(_field(data, "steamId")),
            name=_field(data, "name", ""),
            team=_field(data, "team", ""),
        )


# ============================================================
# ROUND TIMELINE
# ============================================================


@dataclass(frozen=True)
class FirstKill:
    attacker_id: str
    victim_id: str
    weapon: str
    round_time: float  # seconds into the round

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FirstKill:
        return cls(
            attacker_id=str(_field(data, "attackerSteamId")),
            victim_id=str(_field(data, "victimSteamId")),
            weapon=_field(data, "weapon", ""),
            round_time=float(_field(data, "roundTime", 0.0)),
        )


@dataclass(frozen=True)
class ClutchInfo:
    player_id: str
    opponents_alive: int
    won: bool

    @property
    def scenario(self) -> str:
        return f"1v{self.opponents_alive}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClutchInfo:
        return cls(
            player_id=str(_field(data, "playerSteamId")),
            opponents_alive=int(_field(data, "opponentsAlive", 1)),
            won=bool(_field(data, "won", False)),
        )


@dataclass(frozen=True)
class PlantEvent:
    planter_id: str
    site: str  # "A" or "B"
    round_time: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlantEvent:
        return cls(
            planter_id=str(_field(data, "planterSteamId")),
            site=_field(data, "site", ""),
            round_time=float(_field(data, "roundTime", 0.0)),
        )


@dataclass(frozen=True)
class DefuseEvent:
    defuser_id: str
    round_time: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DefuseEvent:
        return cls(
            defuser_id=str(_field(data, "defuserSteamId")),
            round_time=float(_field(data, "roundTime", 0.0)),
        )


@dataclass(frozen=True)
class RoundOutcome:
    """
    One round in the match timeline.

    Round numbers are 1-based and contiguous. ``winner`` is the side that
    won, not the team; use the side resolver to attribute it to a team.
    """

    round_number: int
    winner: Side
    win_method: WinMethod = WinMethod.UNSPECIFIED
    first_kill: FirstKill | None = None
    clutch: ClutchInfo | None = None
    plant: PlantEvent | None = None
    defuse: DefuseEvent | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RoundOutcome:
        first_kill = data.get("firstKill")
        clutch = data.get("clutch")
        plant = data.get("plant")
        defuse = data.get("defuse")
        return cls(
            round_number=int(_field(data, "roundNumber")),
            winner=Side.parse(_field(data, "winner")),
            win_method=WinMethod.parse(data.get("winMethod")),
            first_kill=FirstKill.from_dict(first_kill) if first_kill else None,
            clutch=ClutchInfo.from_dict(clutch) if clutch else None,
            plant=PlantEvent.from_dict(plant) if plant else None,
            defuse=DefuseEvent.from_dict(defuse) if defuse else None,
        )


# ============================================================
# ECONOMY
# ============================================================


@dataclass(frozen=True)
class EconomyRound:
    """Spend, equipment value and buy type for both teams in one round."""

    round_number: int
    team_a_spend: int
    team_b_spend: int
    team_a_equipment_value: int
    team_b_equipment_value: int
    team_a_buy_type: BuyType = BuyType.UNSPECIFIED
    team_b_buy_type: BuyType = BuyType.UNSPECIFIED

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EconomyRound:
        return cls(
            round_number=int(_field(data, "roundNumber")),
            team_a_spend=int(_field(data, "teamASpend", 0)),
            team_b_spend=int(_field(data, "teamBSpend", 0)),
            team_a_equipment_value=int(_field(data, "teamAEquipmentValue", 0)),
            team_b_equipment_value=int(_field(data, "teamBEquipmentValue", 0)),
            team_a_buy_type=BuyType.parse(data.get("teamABuyType")),
            team_b_buy_type=BuyType.parse(data.get("teamBBuyType")),
        )


# ============================================================
# SCOREBOARD
# ============================================================


@dataclass(frozen=True)
class PlayerStats:
    """Per-match scoreboard line for one player."""

    player_id: str
    name: str
    team: str
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    adr: float = 0.0
    kast: float = 0.0  # percentage, 0-100
    hs_pct: float = 0.0  # percentage, 0-100
    rating: float = 0.0
    flash_assists: int = 0
    utility_damage: int = 0

    @property
    def kill_diff(self) -> int:
        return self.kills - self.deaths

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayerStats:
        return cls(
            player_id=str(_field(data, "steamId")),
            name=_field(data, "name", ""),
            team=_field(data, "team", ""),
            kills=int(data.get("kills", 0)),
            deaths=int(data.get("deaths", 0)),
            assists=int(data.get("assists", 0)),
            adr=float(data.get("adr", 0.0)),
            kast=float(data.get("kast", 0.0)),
            hs_pct=float(data.get("hsPct", 0.0)),
            rating=float(data.get("rating", 0.0)),
            flash_assists=int(data.get("flashAssists", 0)),
            utility_damage=int(data.get("utilityDamage", 0)),
        )


# ============================================================
# POSITIONAL DATA
# ============================================================


@dataclass(frozen=True)
class Position:
    """World position in game units. Only x and y are used for display."""

    x: float
    y: float
    z: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Position:
        # Zero coordinates are omitted from the JSON, a missing position is not.
        if data is None:
            raise InvalidMatchDataError("Missing position")
        return cls(
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            z=float(data.get("z", 0.0)),
        )


@dataclass(frozen=True)
class KillEvent:
    round_number: int
    attacker_id: str
    victim_id: str
    attacker_pos: Position
    victim_pos: Position
    weapon: str
    is_headshot: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> KillEvent:
        return cls(
            round_number=int(_field(data, "roundNumber")),
            attacker_id=str(_field(data, "attackerSteamId")),
            victim_id=str(_field(data, "victimSteamId")),
            attacker_pos=Position.from_dict(_field(data, "attackerPos")),
            victim_pos=Position.from_dict(_field(data, "victimPos")),
            weapon=_field(data, "weapon", ""),
            is_headshot=bool(data.get("isHeadshot", False)),
        )


# ============================================================
# MATCH BUNDLE - everything the match detail view fetches
# ============================================================


@dataclass(frozen=True)
class MatchData:
    """A match together with all of its per-round and per-player records."""

    match: Match
    players: tuple[Player, ...] = ()
    player_stats: tuple[PlayerStats, ...] = ()
    rounds: tuple[RoundOutcome, ...] = ()
    economy: tuple[EconomyRound, ...] = ()
    kills: tuple[KillEvent, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MatchData:
        """Build from a combined export.

        Expected layout::

            {"match": {...}, "players": [...], "playerStats": [...],
             "rounds": [...], "economy": [...], "kills": [...]}
        """
        return cls(
            match=Match.from_dict(_field(data, "match")),
            players=tuple(Player.from_dict(p) for p in data.get("players", [])),
            player_stats=tuple(PlayerStats.from_dict(p) for p in data.get("playerStats", [])),
            rounds=tuple(RoundOutcome.from_dict(r) for r in data.get("rounds", [])),
            economy=tuple(EconomyRound.from_dict(r) for r in data.get("economy", [])),
            kills=tuple(KillEvent.from_dict(k) for k in data.get("kills", [])),
        )

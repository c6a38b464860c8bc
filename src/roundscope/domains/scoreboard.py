"""
Scoreboard Ranking

Sorting, team split, team averages and standout players for the match
scoreboard. Sorting is always stable: players with equal values keep their
input order, in both ascending and descending order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd

from roundscope.core.constants import (
    DEFAULT_TEAM_A_LABEL,
    DEFAULT_TEAM_B_LABEL,
    SortKey,
    TeamSlot,
)
from roundscope.core.schemas import Player, PlayerStats

logger = logging.getLogger(__name__)

SORT_ACCESSORS: dict[SortKey, Callable[[PlayerStats], float]] = {
    SortKey.KILLS: lambda p: p.kills,
    SortKey.DEATHS: lambda p: p.deaths,
    SortKey.ASSISTS: lambda p: p.assists,
    SortKey.ADR: lambda p: p.adr,
    SortKey.KAST: lambda p: p.kast,
    SortKey.HS_PCT: lambda p: p.hs_pct,
    SortKey.RATING: lambda p: p.rating,
}

MVP_LABEL = "MVP"
TOP_RATED_LABEL = "Top Rated"
TOP_FRAGGER_LABEL = "Top Fragger"


@dataclass(frozen=True)
class TeamSplit:
    team_a: list[PlayerStats]
    team_b: list[PlayerStats]


@dataclass(frozen=True)
class TeamAverages:
    adr: float
    kast: float
    hs_pct: float
    rating: float


@dataclass(frozen=True)
class Standout:
    player_id: str
    name: str
    label: str


def rank_players(
    players: Iterable[PlayerStats],
    sort_key: SortKey | str = SortKey.RATING,
    ascending: bool = False,
) -> list[PlayerStats]:
    """Stable sort of players by a scoreboard column."""
    accessor = SORT_ACCESSORS[SortKey(sort_key)]
    # sorted() keeps equal elements in input order even with reverse=True
    return sorted(players, key=accessor, reverse=not ascending)


def split_by_team(
    players: Iterable[PlayerStats],
    team_a_label: str = DEFAULT_TEAM_A_LABEL,
    team_b_label: str = DEFAULT_TEAM_B_LABEL,
) -> TeamSplit:
    """Partition players by team label without reordering.

    Players whose label matches neither team are left out.
    """
    team_a: list[PlayerStats] = []
    team_b: list[PlayerStats] = []
    for p in players:
        if p.team == team_a_label:
            team_a.append(p)
        elif p.team == team_b_label:
            team_b.append(p)
        else:
            logger.debug(f"Player {p.player_id} has unknown team label {p.team!r}")
    return TeamSplit(team_a, team_b)


def team_averages(players: Sequence[PlayerStats]) -> TeamAverages | None:
    """Mean ADR, KAST, HS% and rating. None for an empty roster."""
    if not players:
        return None
    values = np.array([(p.adr, p.kast, p.hs_pct, p.rating) for p in players], dtype=float)
    adr, kast, hs_pct, rating = values.mean(axis=0)
    return TeamAverages(float(adr), float(kast), float(hs_pct), float(rating))


def identify_mvp(players: Iterable[PlayerStats]) -> str | None:
    """Player id with the highest rating across both teams.

    On a tie the earliest player in input order wins.
    """
    best: PlayerStats | None = None
    for p in players:
        if best is None or p.rating > best.rating:
            best = p
    return best.player_id if best else None


def _first_max(players: Sequence[PlayerStats], key: Callable[[PlayerStats], float]) -> PlayerStats:
    best = players[0]
    for p in players[1:]:
        if key(p) > key(best):
            best = p
    return best


def _team_standouts(team: Sequence[PlayerStats], mvp_id: str | None) -> list[Standout]:
    if not team:
        return []
    top_rated = _first_max(team, lambda p: p.rating)
    label = MVP_LABEL if top_rated.player_id == mvp_id else TOP_RATED_LABEL
    standouts = [Standout(top_rated.player_id, top_rated.name, label)]

    top_fragger = _first_max(team, lambda p: p.kill_diff)
    if top_fragger.player_id != top_rated.player_id:
        standouts.append(Standout(top_fragger.player_id, top_fragger.name, TOP_FRAGGER_LABEL))
    return standouts


def identify_standouts(
    players: Sequence[PlayerStats],
    team_a_label: str = DEFAULT_TEAM_A_LABEL,
    team_b_label: str = DEFAULT_TEAM_B_LABEL,
) -> dict[TeamSlot, list[Standout]]:
    """
    Up to two standout players per team.

    The top-rated player is labelled MVP when they are also the match MVP,
    otherwise Top Rated. A different player leading the team in
    kills minus deaths is added as Top Fragger.
    """
    mvp_id = identify_mvp(players)
    split = split_by_team(players, team_a_label, team_b_label)
    return {
        TeamSlot.A: _team_standouts(split.team_a, mvp_id),
        TeamSlot.B: _team_standouts(split.team_b, mvp_id),
    }


def player_name(player_id: str, roster: Iterable[Player | PlayerStats]) -> str:
    """Display name for a player id, falling back to the id itself."""
    for p in roster:
        if p.player_id == player_id:
            return p.name
    return player_id


SCOREBOARD_COLUMNS = [
    "player_id",
    "name",
    "team",
    "kills",
    "deaths",
    "assists",
    "adr",
    "kast",
    "hs_pct",
    "rating",
    "flash_assists",
    "utility_damage",
]


def scoreboard_frame(players: Iterable[PlayerStats]) -> pd.DataFrame:
    """Scoreboard as a DataFrame, rows in input order."""
    rows = [{col: getattr(p, col) for col in SCOREBOARD_COLUMNS} for p in players]
    return pd.DataFrame(rows, columns=SCOREBOARD_COLUMNS)

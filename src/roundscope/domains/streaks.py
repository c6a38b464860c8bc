"""
Win Streak Detection

Extracts maximal runs of consecutive rounds won by the same team. Works on
team-attributed rounds (see sides.attribute_rounds), so a run keeps going
across the half-time side swap.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from roundscope.core.constants import HALF_LENGTH, MIN_STREAK_LENGTH, Side, TeamSlot
from roundscope.core.schemas import RoundOutcome
from roundscope.domains.sides import RoundWinner, attribute_rounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Streak:
    """A run of consecutive round wins by one team."""

    team: TeamSlot
    start_round: int
    end_round: int
    length: int


@dataclass(frozen=True)
class StreakLength:
    team: TeamSlot
    length: int


def find_streaks(
    round_winners: Sequence[RoundWinner],
    min_length: int = MIN_STREAK_LENGTH,
) -> list[Streak]:
    """
    Find every maximal win streak of at least ``min_length`` rounds.

    Runs shorter than ``min_length`` are dropped entirely. Streaks are
    returned in round order.
    """
    streaks: list[Streak] = []
    if not round_winners:
        return streaks

    current_team = round_winners[0].team
    run_start = round_winners[0].round_number
    run_length = 0
    previous_round = run_start

    for winner in round_winners:
        if winner.team is not current_team:
            if run_length >= min_length:
                streaks.append(Streak(current_team, run_start, previous_round, run_length))
            current_team = winner.team
            run_start = winner.round_number
            run_length = 0
        run_length += 1
        previous_round = winner.round_number

    if run_length >= min_length:
        streaks.append(Streak(current_team, run_start, round_winners[-1].round_number, run_length))

    logger.debug(f"Found {len(streaks)} streaks of >= {min_length} rounds")
    return streaks


def longest_streak(
    rounds: Iterable[RoundOutcome],
    team_a_started_as: Side | str,
    half_length: int = HALF_LENGTH,
) -> StreakLength | None:
    """
    Longest single run of round wins in a match.

    Ties keep the first run encountered. Returns None when there are no
    rounds.
    """
    best: StreakLength | None = None
    current_team: TeamSlot | None = None
    run_length = 0

    for winner in attribute_rounds(rounds, team_a_started_as, half_length):
        if winner.team is current_team:
            run_length += 1
        else:
            current_team = winner.team
            run_length = 1
        if best is None or run_length > best.length:
            best = StreakLength(current_team, run_length)

    return best

"""
Side Resolution for CS2 Match Timelines

Round records carry the *side* that won (CT or T). Teams swap sides at the
half, so the same side label credits a different team before and after the
swap. This module turns side wins into team wins:

- resolve_winning_team: attribute one round to team A or B
- attribute_rounds: attribute a whole timeline
- running_scores: cumulative score after each round

Only a single swap at ``half_length`` is applied. Every round after the
first half counts as swapped, overtime halves included.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from roundscope.core.constants import HALF_LENGTH, InvalidMatchDataError, Side, TeamSlot
from roundscope.core.schemas import RoundOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundWinner:
    """A round attributed to the team that won it."""

    round_number: int
    team: TeamSlot


@dataclass(frozen=True)
class ScoreLine:
    """Cumulative score after a round."""

    round_number: int
    team_a: int
    team_b: int

    def __str__(self) -> str:
        return f"{self.team_a}-{self.team_b}"


def resolve_winning_team(
    round_number: int,
    winning_side: Side | str,
    team_a_started_as: Side | str,
    half_length: int = HALF_LENGTH,
) -> TeamSlot:
    """
    Determine which team won a round from the winning side label.

    Args:
        round_number: 1-based round number.
        winning_side: Side that won the round ("CT" or "T").
        team_a_started_as: Side team A played in round 1.
        half_length: Rounds per half before the side swap.

    Returns:
        TeamSlot.A or TeamSlot.B.

    Raises:
        InvalidMatchDataError: round number below 1 or a missing label.
    """
    if round_number < 1:
        raise InvalidMatchDataError(f"Round number must be >= 1, got {round_number}")
    if half_length < 1:
        raise InvalidMatchDataError(f"Half length must be >= 1, got {half_length}")

    winner = Side.parse(winning_side)
    team_a_side = Side.parse(team_a_started_as)
    if round_number > half_length:
        team_a_side = team_a_side.opposite

    return TeamSlot.A if winner is team_a_side else TeamSlot.B


def attribute_rounds(
    rounds: Iterable[RoundOutcome],
    team_a_started_as: Side | str,
    half_length: int = HALF_LENGTH,
) -> list[RoundWinner]:
    """Attribute every round of a timeline to a team, preserving order."""
    return [
        RoundWinner(
            round_number=r.round_number,
            team=resolve_winning_team(r.round_number, r.winner, team_a_started_as, half_length),
        )
        for r in rounds
    ]


def running_scores(
    rounds: Iterable[RoundOutcome],
    team_a_started_as: Side | str,
    half_length: int = HALF_LENGTH,
) -> list[ScoreLine]:
    """Cumulative team A / team B score after each round."""
    score_a = 0
    score_b = 0
    lines = []
    for winner in attribute_rounds(rounds, team_a_started_as, half_length):
        if winner.team is TeamSlot.A:
            score_a += 1
        else:
            score_b += 1
        lines.append(ScoreLine(winner.round_number, score_a, score_b))
    return lines

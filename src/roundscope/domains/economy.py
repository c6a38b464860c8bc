"""
Economy Outcome Classification

Joins each team's buy type with the round result:
- Buy outcome badges (eco/force upsets, regular wins, losses)
- Per-team eco and force win counts for the match narrative
- Per-round spend and equipment table for charting
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import pandas as pd

from roundscope.core.constants import HALF_LENGTH, BuyType, Severity, Side, TeamSlot
from roundscope.core.schemas import EconomyRound, RoundOutcome
from roundscope.domains.sides import resolve_winning_team

logger = logging.getLogger(__name__)

BUY_TYPE_LABELS = {
    BuyType.ECO: "Eco",
    BuyType.FORCE: "Force",
    BuyType.FULL: "Full",
    BuyType.PISTOL: "Pistol",
}

# Buy types where a round win is an upset
UPSET_BUY_TYPES = {BuyType.ECO, BuyType.FORCE}


@dataclass(frozen=True)
class BuyOutcome:
    """Badge for one team's buy in one round."""

    label: str
    severity: Severity


@dataclass(frozen=True)
class EconomyWinSummary:
    """Rounds each team won while on an eco or force buy."""

    team_a_eco_wins: int = 0
    team_a_force_wins: int = 0
    team_b_eco_wins: int = 0
    team_b_force_wins: int = 0

    @property
    def has_narrative(self) -> bool:
        return any(
            (
                self.team_a_eco_wins,
                self.team_a_force_wins,
                self.team_b_eco_wins,
                self.team_b_force_wins,
            )
        )

    def eco_wins(self, team: TeamSlot) -> int:
        return self.team_a_eco_wins if team is TeamSlot.A else self.team_b_eco_wins

    def force_wins(self, team: TeamSlot) -> int:
        return self.team_a_force_wins if team is TeamSlot.A else self.team_b_force_wins


def buy_type_label(buy_type: BuyType | str) -> str:
    """Short display label, empty for an unspecified buy."""
    return BUY_TYPE_LABELS.get(BuyType.parse(buy_type), "")


def classify_buy_outcome(buy_type: BuyType | str, won: bool) -> BuyOutcome | None:
    """
    Badge for a team's round given its buy type and the result.

    Returns None for an unspecified buy type (no badge is shown).
    """
    buy_type = BuyType.parse(buy_type)
    if buy_type is BuyType.UNSPECIFIED:
        return None
    if not won:
        return BuyOutcome("Lost", Severity.LOSS)
    if buy_type in UPSET_BUY_TYPES:
        return BuyOutcome(f"{BUY_TYPE_LABELS[buy_type]} Win!", Severity.UPSET)
    return BuyOutcome("Won", Severity.WIN)


def summarize_economy_wins(
    economy_rounds: Iterable[EconomyRound],
    round_outcomes: Iterable[RoundOutcome],
    team_a_started_as: Side | str,
    half_length: int = HALF_LENGTH,
) -> EconomyWinSummary:
    """
    Count eco and force round wins per team.

    Economy rounds are joined to outcomes by round number; economy rounds
    with no matching outcome are skipped.
    """
    winners = {
        r.round_number: resolve_winning_team(r.round_number, r.winner, team_a_started_as, half_length)
        for r in round_outcomes
    }

    counts = {
        (TeamSlot.A, BuyType.ECO): 0,
        (TeamSlot.A, BuyType.FORCE): 0,
        (TeamSlot.B, BuyType.ECO): 0,
        (TeamSlot.B, BuyType.FORCE): 0,
    }

    for econ in economy_rounds:
        winner = winners.get(econ.round_number)
        if winner is None:
            logger.debug(f"No outcome for economy round {econ.round_number}, skipping")
            continue
        buy_type = econ.team_a_buy_type if winner is TeamSlot.A else econ.team_b_buy_type
        key = (winner, buy_type)
        if key in counts:
            counts[key] += 1

    return EconomyWinSummary(
        team_a_eco_wins=counts[(TeamSlot.A, BuyType.ECO)],
        team_a_force_wins=counts[(TeamSlot.A, BuyType.FORCE)],
        team_b_eco_wins=counts[(TeamSlot.B, BuyType.ECO)],
        team_b_force_wins=counts[(TeamSlot.B, BuyType.FORCE)],
    )


ECONOMY_COLUMNS = [
    "round",
    "team_a_spend",
    "team_b_spend",
    "team_a_equipment",
    "team_b_equipment",
    "team_a_buy",
    "team_b_buy",
]


def economy_frame(economy_rounds: Iterable[EconomyRound]) -> pd.DataFrame:
    """Per-round economy table, one row per round, ordered by round number."""
    rows = [
        {
            "round": r.round_number,
            "team_a_spend": r.team_a_spend,
            "team_b_spend": r.team_b_spend,
            "team_a_equipment": r.team_a_equipment_value,
            "team_b_equipment": r.team_b_equipment_value,
            "team_a_buy": buy_type_label(r.team_a_buy_type),
            "team_b_buy": buy_type_label(r.team_b_buy_type),
        }
        for r in economy_rounds
    ]
    if not rows:
        return pd.DataFrame(columns=ECONOMY_COLUMNS)
    return pd.DataFrame(rows, columns=ECONOMY_COLUMNS).sort_values("round", kind="stable").reset_index(drop=True)

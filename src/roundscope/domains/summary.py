"""
Match Summary Aggregation

Dashboard-level facts over many matches and narrative facts for one match:
- summarize_matches: count, most played map, average duration, last upload
- compute_halftime_score / classify_result / is_overtime
- summarize_match: the per-match narrative bundle
- Small display helpers shared by the match list and match detail views
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from roundscope.core.constants import (
    COMFORTABLE_MARGIN,
    DECISIVE_MARGIN,
    HALF_LENGTH,
    OVERTIME_ROUND_THRESHOLD,
    RECENT_MATCHES_LIMIT,
    Severity,
    Side,
    TeamSlot,
    WinMethod,
)
from roundscope.core.schemas import Match, RoundOutcome
from roundscope.domains.sides import resolve_winning_team
from roundscope.domains.streaks import StreakLength, longest_streak

logger = logging.getLogger(__name__)

WIN_METHOD_LABELS = {
    WinMethod.ELIMINATION: "Elimination",
    WinMethod.BOMB_EXPLODED: "Bomb Exploded",
    WinMethod.BOMB_DEFUSED: "Bomb Defused",
    WinMethod.TIME_EXPIRED: "Time Expired",
}


@dataclass(frozen=True)
class MatchesSummary:
    """
    Fleet-wide summary for the dashboard.

    When ``count`` is 0 the other fields are sentinels (empty strings and
    zeros) and should not be displayed.
    """

    count: int = 0
    most_played_map: str = ""
    most_played_map_count: int = 0
    avg_duration_seconds: int = 0
    most_recent_timestamp: str = ""


@dataclass(frozen=True)
class HalftimeScore:
    team_a_wins: int
    team_b_wins: int


@dataclass(frozen=True)
class MatchResult:
    label: str
    severity: Severity


@dataclass(frozen=True)
class MatchNarrative:
    """Derived facts shown in the match detail header."""

    halftime: HalftimeScore
    overtime: bool
    result: MatchResult
    longest_streak: StreakLength | None


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def summarize_matches(matches: Iterable[Match]) -> MatchesSummary:
    """
    Summarize a set of matches.

    The most played map is the one with the highest count; on a tie the map
    seen first in the input wins. The most recent timestamp is the greatest
    ISO-8601 date string.
    """
    map_counts: dict[str, int] = {}
    total_duration = 0
    latest = ""
    count = 0

    for match in matches:
        count += 1
        map_counts[match.map_name] = map_counts.get(match.map_name, 0) + 1
        total_duration += match.duration_seconds
        if not latest or match.date > latest:
            latest = match.date

    if count == 0:
        return MatchesSummary()

    most_played_map = ""
    most_played_map_count = 0
    for map_name, n in map_counts.items():
        if n > most_played_map_count:
            most_played_map = map_name
            most_played_map_count = n

    return MatchesSummary(
        count=count,
        most_played_map=most_played_map,
        most_played_map_count=most_played_map_count,
        avg_duration_seconds=_round_half_up(total_duration / count),
        most_recent_timestamp=latest,
    )


def compute_halftime_score(
    rounds: Iterable[RoundOutcome],
    team_a_started_as: Side | str,
    half_length: int = HALF_LENGTH,
) -> HalftimeScore:
    """Score at the half. Rounds after ``half_length`` are ignored."""
    team_a = 0
    team_b = 0
    for r in rounds:
        if r.round_number > half_length:
            continue
        if resolve_winning_team(r.round_number, r.winner, team_a_started_as, half_length) is TeamSlot.A:
            team_a += 1
        else:
            team_b += 1
    return HalftimeScore(team_a, team_b)


def is_overtime(score_a: int, score_b: int, overtime_threshold: int = OVERTIME_ROUND_THRESHOLD) -> bool:
    return score_a + score_b > overtime_threshold


def classify_result(
    score_a: int,
    score_b: int,
    overtime_threshold: int = OVERTIME_ROUND_THRESHOLD,
    decisive_margin: int = DECISIVE_MARGIN,
    comfortable_margin: int = COMFORTABLE_MARGIN,
) -> MatchResult:
    """
    Classify a final score.

    Checked in priority order: overtime, draw, decisive, comfortable, close.
    """
    if is_overtime(score_a, score_b, overtime_threshold):
        return MatchResult("Overtime", Severity.OVERTIME)

    margin = abs(score_a - score_b)
    if margin == 0:
        return MatchResult("Draw", Severity.DRAW)
    if margin >= decisive_margin:
        return MatchResult("Decisive Win", Severity.DECISIVE)
    if margin >= comfortable_margin:
        return MatchResult("Comfortable Win", Severity.COMFORTABLE)
    return MatchResult("Close Match", Severity.CLOSE)


def summarize_match(
    match: Match,
    rounds: Sequence[RoundOutcome],
    half_length: int = HALF_LENGTH,
    overtime_threshold: int = OVERTIME_ROUND_THRESHOLD,
    decisive_margin: int = DECISIVE_MARGIN,
    comfortable_margin: int = COMFORTABLE_MARGIN,
) -> MatchNarrative:
    """Bundle the derived facts for a single match."""
    return MatchNarrative(
        halftime=compute_halftime_score(rounds, match.team_a_started_as, half_length),
        overtime=is_overtime(match.team_a_score, match.team_b_score, overtime_threshold),
        result=classify_result(
            match.team_a_score, match.team_b_score, overtime_threshold, decisive_margin, comfortable_margin
        ),
        longest_streak=longest_streak(rounds, match.team_a_started_as, half_length),
    )


# ============================================================================
# Display helpers
# ============================================================================


def recent_matches(matches: Sequence[Match], limit: int = RECENT_MATCHES_LIMIT) -> list[Match]:
    """First ``limit`` matches, in the order the service listed them."""
    return list(matches[:limit])


def format_duration(seconds: int) -> str:
    """Format seconds as m:ss."""
    minutes, secs = divmod(max(int(seconds), 0), 60)
    return f"{minutes}:{secs:02d}"


def win_method_label(win_method: WinMethod | str) -> str:
    return WIN_METHOD_LABELS.get(WinMethod.parse(win_method), "Unknown")

"""Tests for dashboard and per-match summaries."""

import pytest

from roundscope.core.constants import Severity, Side, TeamSlot, WinMethod
from roundscope.core.schemas import Match, RoundOutcome
from roundscope.domains.streaks import StreakLength
from roundscope.domains.summary import (
    HalftimeScore,
    MatchesSummary,
    classify_result,
    compute_halftime_score,
    format_duration,
    is_overtime,
    recent_matches,
    summarize_match,
    summarize_matches,
    win_method_label,
)


def _match(
    map_name: str = "de_dust2",
    date: str = "2026-01-01T12:00:00Z",
    duration: int = 2400,
    score_a: int = 13,
    score_b: int = 7,
    started_as: Side = Side.CT,
    match_id: str = "m1",
) -> Match:
    return Match(
        id=match_id,
        map_name=map_name,
        date=date,
        duration_seconds=duration,
        team_a_name="Alpha",
        team_b_name="Bravo",
        team_a_score=score_a,
        team_b_score=score_b,
        team_a_started_as=started_as,
    )


class TestSummarizeMatches:
    """Tests for summarize_matches."""

    def test_empty_input_gives_sentinel_summary(self):
        summary = summarize_matches([])

        assert summary == MatchesSummary()
        assert summary.count == 0
        assert summary.most_played_map == ""
        assert summary.avg_duration_seconds == 0
        assert summary.most_recent_timestamp == ""

    def test_most_played_map(self):
        summary = summarize_matches(
            [_match("de_dust2"), _match("de_dust2"), _match("de_mirage")]
        )

        assert summary.count == 3
        assert summary.most_played_map == "de_dust2"
        assert summary.most_played_map_count == 2

    def test_map_tie_goes_to_first_seen(self):
        """Not alphabetical: de_nuke appears before de_ancient."""
        summary = summarize_matches(
            [_match("de_nuke"), _match("de_ancient"), _match("de_nuke"), _match("de_ancient")]
        )

        assert summary.most_played_map == "de_nuke"
        assert summary.most_played_map_count == 2

    def test_map_tie_ignores_which_map_reaches_max_first(self):
        """de_dust2 reaches 2 first, but de_mirage was seen first."""
        summary = summarize_matches(
            [_match("de_mirage"), _match("de_dust2"), _match("de_dust2"), _match("de_mirage")]
        )

        assert summary.most_played_map == "de_mirage"
        assert summary.most_played_map_count == 2

    def test_average_duration_rounds_half_up(self):
        summary = summarize_matches([_match(duration=100), _match(duration=101)])
        assert summary.avg_duration_seconds == 101

    def test_most_recent_timestamp(self):
        summary = summarize_matches(
            [
                _match(date="2026-03-01T10:00:00Z"),
                _match(date="2026-05-20T09:30:00Z"),
                _match(date="2026-04-11T23:59:59Z"),
            ]
        )
        assert summary.most_recent_timestamp == "2026-05-20T09:30:00Z"

    def test_accepts_generator(self):
        summary = summarize_matches(_match() for _ in range(2))
        assert summary.count == 2


class TestHalftimeScore:
    """Tests for compute_halftime_score."""

    def test_only_first_half_counted(self):
        rounds = [RoundOutcome(i, Side.CT) for i in range(1, 16)]
        assert compute_halftime_score(rounds, Side.CT) == HalftimeScore(12, 0)

    def test_attributes_by_starting_side(self):
        rounds = [RoundOutcome(1, Side.T), RoundOutcome(2, Side.T), RoundOutcome(3, Side.CT)]
        assert compute_halftime_score(rounds, Side.T) == HalftimeScore(2, 1)

    def test_empty(self):
        assert compute_halftime_score([], Side.CT) == HalftimeScore(0, 0)


class TestClassifyResult:
    """Tests for classify_result."""

    def test_decisive(self):
        result = classify_result(16, 0)
        assert result.label == "Decisive Win"
        assert result.severity is Severity.DECISIVE

    def test_close(self):
        assert classify_result(13, 12).label == "Close Match"

    def test_comfortable(self):
        assert classify_result(13, 9).label == "Comfortable Win"
        assert classify_result(6, 13).severity is Severity.COMFORTABLE

    def test_draw(self):
        assert classify_result(12, 12).label == "Draw"

    def test_overtime_beats_draw(self):
        """16-16 is 32 rounds, over 30, so overtime wins over the zero margin."""
        result = classify_result(16, 16)
        assert result.label == "Overtime"
        assert result.severity is Severity.OVERTIME

    @pytest.mark.parametrize("score_a,score_b,expected", [(15, 15, False), (16, 15, True), (0, 0, False)])
    def test_is_overtime(self, score_a, score_b, expected):
        assert is_overtime(score_a, score_b) is expected


class TestSummarizeMatch:
    """Tests for the per-match narrative bundle."""

    def test_bundle(self):
        match = _match(score_a=13, score_b=3)
        rounds = [RoundOutcome(i, Side.CT) for i in range(1, 13)]
        rounds += [RoundOutcome(13, Side.T)]

        narrative = summarize_match(match, rounds)

        assert narrative.halftime == HalftimeScore(12, 0)
        assert not narrative.overtime
        assert narrative.result.label == "Decisive Win"
        assert narrative.longest_streak == StreakLength(TeamSlot.A, 13)

    def test_no_rounds(self):
        narrative = summarize_match(_match(score_a=0, score_b=0), [])
        assert narrative.longest_streak is None
        assert narrative.result.label == "Draw"


class TestDisplayHelpers:
    def test_format_duration(self):
        assert format_duration(0) == "0:00"
        assert format_duration(65) == "1:05"
        assert format_duration(2400) == "40:00"

    def test_win_method_label(self):
        assert win_method_label(WinMethod.BOMB_DEFUSED) == "Bomb Defused"
        assert win_method_label("WIN_METHOD_TIME_EXPIRED") == "Time Expired"
        assert win_method_label(WinMethod.UNSPECIFIED) == "Unknown"

    def test_recent_matches(self):
        matches = [_match(match_id=str(i)) for i in range(8)]
        assert [m.id for m in recent_matches(matches)] == ["0", "1", "2", "3", "4"]
        assert recent_matches([]) == []

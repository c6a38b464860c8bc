"""Tests for scoreboard ranking, averages and standouts."""

import pytest

from roundscope.core.constants import SortKey, TeamSlot
from roundscope.core.schemas import Player, PlayerStats
from roundscope.domains.scoreboard import (
    Standout,
    TeamAverages,
    identify_mvp,
    identify_standouts,
    player_name,
    rank_players,
    scoreboard_frame,
    split_by_team,
    team_averages,
)


def _player(
    player_id: str,
    team: str = "CT",
    kills: int = 10,
    deaths: int = 10,
    rating: float = 1.0,
    adr: float = 75.0,
    kast: float = 70.0,
    hs_pct: float = 40.0,
) -> PlayerStats:
    return PlayerStats(
        player_id=player_id,
        name=f"player_{player_id}",
        team=team,
        kills=kills,
        deaths=deaths,
        rating=rating,
        adr=adr,
        kast=kast,
        hs_pct=hs_pct,
    )


class TestRankPlayers:
    """Tests for rank_players."""

    def test_descending_by_rating(self):
        players = [_player("1", rating=0.9), _player("2", rating=1.4), _player("3", rating=1.1)]
        assert [p.player_id for p in rank_players(players)] == ["2", "3", "1"]

    def test_ascending(self):
        players = [_player("1", kills=20), _player("2", kills=5)]
        ranked = rank_players(players, SortKey.KILLS, ascending=True)
        assert [p.player_id for p in ranked] == ["2", "1"]

    def test_stable_descending(self):
        """Equal ratings keep their input order when sorting descending."""
        players = [
            _player("a", rating=1.0),
            _player("b", rating=1.2),
            _player("c", rating=1.0),
            _player("d", rating=1.2),
        ]
        assert [p.player_id for p in rank_players(players, "rating")] == ["b", "d", "a", "c"]

    def test_stable_ascending(self):
        players = [_player("a", deaths=7), _player("b", deaths=7), _player("c", deaths=3)]
        ranked = rank_players(players, SortKey.DEATHS, ascending=True)
        assert [p.player_id for p in ranked] == ["c", "a", "b"]

    @pytest.mark.parametrize("key", list(SortKey))
    def test_every_sort_key_supported(self, key):
        assert len(rank_players([_player("1"), _player("2")], key)) == 2

    def test_unknown_sort_key(self):
        with pytest.raises(ValueError):
            rank_players([_player("1")], "name")

    def test_input_not_mutated(self):
        players = [_player("1", rating=0.5), _player("2", rating=1.5)]
        rank_players(players)
        assert [p.player_id for p in players] == ["1", "2"]


class TestSplitByTeam:
    def test_partition_keeps_order(self):
        players = [_player("1", "T"), _player("2", "CT"), _player("3", "T"), _player("4", "CT")]
        split = split_by_team(players)

        assert [p.player_id for p in split.team_a] == ["2", "4"]
        assert [p.player_id for p in split.team_b] == ["1", "3"]

    def test_unknown_team_left_out(self):
        split = split_by_team([_player("1", "Spectator")])
        assert split.team_a == [] and split.team_b == []

    def test_custom_labels(self):
        split = split_by_team([_player("1", "Alpha"), _player("2", "Bravo")], "Alpha", "Bravo")
        assert [p.player_id for p in split.team_a] == ["1"]


class TestTeamAverages:
    def test_mean_of_each_field(self):
        averages = team_averages(
            [
                _player("1", adr=80.0, kast=70.0, hs_pct=50.0, rating=1.2),
                _player("2", adr=60.0, kast=80.0, hs_pct=30.0, rating=0.8),
            ]
        )
        assert isinstance(averages, TeamAverages)
        assert averages.adr == pytest.approx(70.0)
        assert averages.kast == pytest.approx(75.0)
        assert averages.hs_pct == pytest.approx(40.0)
        assert averages.rating == pytest.approx(1.0)

    def test_empty_roster_is_none_not_zero(self):
        assert team_averages([]) is None


class TestMvp:
    def test_highest_rating_across_teams(self):
        players = [_player("1", "CT", rating=1.1), _player("2", "T", rating=1.6)]
        assert identify_mvp(players) == "2"

    def test_tie_goes_to_earliest(self):
        players = [_player("1", rating=1.3), _player("2", rating=1.5), _player("3", rating=1.5)]
        assert identify_mvp(players) == "2"

    def test_empty(self):
        assert identify_mvp([]) is None


class TestStandouts:
    """Tests for identify_standouts."""

    def test_mvp_and_top_fragger(self):
        players = [
            _player("1", "CT", kills=25, deaths=10, rating=1.3),
            _player("2", "CT", kills=20, deaths=12, rating=1.5),
            _player("3", "T", kills=15, deaths=15, rating=1.0),
        ]

        standouts = identify_standouts(players)

        assert standouts[TeamSlot.A] == [
            Standout("2", "player_2", "MVP"),
            Standout("1", "player_1", "Top Fragger"),
        ]
        assert standouts[TeamSlot.B] == [Standout("3", "player_3", "Top Rated")]

    def test_same_player_not_listed_twice(self):
        players = [
            _player("1", "T", kills=30, deaths=5, rating=1.8),
            _player("2", "T", kills=10, deaths=10, rating=0.9),
        ]
        assert identify_standouts(players)[TeamSlot.B] == [Standout("1", "player_1", "MVP")]

    def test_empty_team(self):
        standouts = identify_standouts([_player("1", "CT")])
        assert standouts[TeamSlot.B] == []


class TestHelpers:
    def test_player_name_lookup(self):
        roster = [Player("76561198000000001", "s1mple", "CT")]
        assert player_name("76561198000000001", roster) == "s1mple"
        assert player_name("unknown", roster) == "unknown"

    def test_scoreboard_frame(self):
        frame = scoreboard_frame([_player("1", kills=21), _player("2", kills=9)])
        assert list(frame["kills"]) == [21, 9]
        assert "utility_damage" in frame.columns

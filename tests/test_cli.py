"""Tests for the command line interface."""

import json
import logging

import pytest
from typer.testing import CliRunner

from roundscope import __version__
from roundscope.cli import _resolve_log_level, app
from roundscope.visualization.killmap import compute_bounds

runner = CliRunner()


@pytest.fixture
def match_file(tmp_path):
    rounds = [{"roundNumber": i, "winner": "CT", "winMethod": "WIN_METHOD_ELIMINATION"} for i in range(1, 6)]
    rounds.append(
        {
            "roundNumber": 6,
            "winner": "T",
            "winMethod": "WIN_METHOD_BOMB_EXPLODED",
            "clutch": {"playerSteamId": "2", "opponentsAlive": 2, "won": True},
        }
    )
    payload = {
        "match": {
            "id": "m1",
            "mapName": "de_inferno",
            "date": "2026-06-01T18:00:00Z",
            "durationSeconds": 1800,
            "teamAName": "Alpha",
            "teamBName": "Bravo",
            "teamAScore": 5,
            "teamBScore": 1,
            "teamAStartedAs": "CT",
        },
        "players": [
            {"steamId": "1", "name": "ace", "team": "CT"},
            {"steamId": "2", "name": "bee", "team": "T"},
        ],
        "playerStats": [
            {"steamId": "1", "name": "ace", "team": "CT", "kills": 12, "deaths": 3, "rating": 1.6},
            {"steamId": "2", "name": "bee", "team": "T", "kills": 4, "deaths": 10, "rating": 0.7},
        ],
        "rounds": rounds,
        "economy": [
            {"roundNumber": 2, "teamABuyType": "BUY_TYPE_ECO", "teamBBuyType": "BUY_TYPE_FULL"},
        ],
        "kills": [
            {
                "roundNumber": 1,
                "attackerSteamId": "1",
                "victimSteamId": "2",
                "attackerPos": {"x": 0, "y": 0},
                "victimPos": {"x": 100, "y": 100},
                "weapon": "ak47",
            },
            {
                "roundNumber": 2,
                "attackerSteamId": "1",
                "victimSteamId": "2",
                "attackerPos": {"x": 50, "y": 50},
                "victimPos": {"x": 60, "y": 40},
                "weapon": "awp",
            },
        ],
    }
    path = tmp_path / "match.json"
    path.write_text(json.dumps(payload))
    return path


class TestCli:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_report(self, match_file):
        result = runner.invoke(app, ["report", str(match_file)])

        assert result.exit_code == 0, result.stdout
        assert "Comfortable Win" in result.stdout
        assert "eco wins" in result.stdout
        assert "MVP" in result.stdout

    def test_report_invalid_data(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"match": {"id": "x", "teamAScore": 1, "teamBScore": 0, "teamAStartedAs": "CT"},
                                    "rounds": [{"roundNumber": 0, "winner": "CT"}]}))

        result = runner.invoke(app, ["report", str(path)])

        assert result.exit_code == 1
        assert "Invalid match data" in result.stdout

    def test_kills_filter(self, match_file):
        result = runner.invoke(app, ["kills", str(match_file), "--weapon", "awp"])

        assert result.exit_code == 0, result.stdout
        assert "Kills (1 of 2)" in result.stdout

    def test_dashboard(self, tmp_path):
        path = tmp_path / "matches.json"
        path.write_text(
            json.dumps(
                {
                    "matches": [
                        {"id": "1", "mapName": "de_nuke", "durationSeconds": 60, "teamAScore": 13, "teamBScore": 2, "teamAStartedAs": "CT"},
                        {"id": "2", "mapName": "de_nuke", "durationSeconds": 120, "teamAScore": 13, "teamBScore": 9, "teamAStartedAs": "T"},
                    ]
                }
            )
        )

        result = runner.invoke(app, ["dashboard", str(path)])

        assert result.exit_code == 0, result.stdout
        assert "de_nuke" in result.stdout
        assert "1:30" in result.stdout

    def test_dashboard_empty(self, tmp_path):
        path = tmp_path / "matches.json"
        path.write_text("[]")

        result = runner.invoke(app, ["dashboard", str(path)])

        assert result.exit_code == 0
        assert "No matches yet" in result.stdout

    def test_init_config(self, tmp_path):
        path = tmp_path / "roundscope.yaml"
        result = runner.invoke(app, ["init-config", str(path)])

        assert result.exit_code == 0
        assert "half_length: 12" in path.read_text()


class TestCliConfig:
    def test_default_sort_key_from_config(self, tmp_path, match_file):
        config = tmp_path / "roundscope.yaml"
        config.write_text("scoreboard:\n  default_sort_key: kills\n")

        result = runner.invoke(app, ["--config", str(config), "report", str(match_file)])

        assert result.exit_code == 0, result.stdout

    def test_unknown_default_sort_key(self, tmp_path, match_file):
        config = tmp_path / "roundscope.yaml"
        config.write_text("scoreboard:\n  default_sort_key: headshots\n")

        result = runner.invoke(app, ["--config", str(config), "report", str(match_file)])

        assert result.exit_code == 1
        assert "Unknown sort key" in result.stdout

    def test_min_padding_from_config(self, tmp_path, match_file, monkeypatch):
        config = tmp_path / "roundscope.yaml"
        config.write_text("spatial:\n  min_padding: 50.0\n")
        seen = {}

        def spy(kills, padding_fraction, min_padding):
            seen["min_padding"] = min_padding
            return compute_bounds(kills, padding_fraction, min_padding)

        monkeypatch.setattr("roundscope.cli.compute_bounds", spy)

        result = runner.invoke(app, ["--config", str(config), "kills", str(match_file)])

        assert result.exit_code == 0, result.stdout
        assert seen["min_padding"] == 50.0

    @pytest.mark.parametrize("level", ["10", "debug", "chatty"])
    def test_log_level_from_env(self, monkeypatch, tmp_path, level):
        monkeypatch.setenv("ROUNDSCOPE_LOG_LEVEL", level)
        path = tmp_path / "matches.json"
        path.write_text("[]")

        result = runner.invoke(app, ["dashboard", str(path)])

        assert result.exit_code == 0, result.stdout


class TestResolveLogLevel:
    def test_names_and_numbers(self):
        assert _resolve_log_level("warning") == logging.WARNING
        assert _resolve_log_level("10") == logging.DEBUG
        assert _resolve_log_level(20) == logging.INFO

    def test_unknown_falls_back_to_info(self):
        assert _resolve_log_level("chatty") == logging.INFO

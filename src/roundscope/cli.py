"""
RoundScope CLI - Command Line Interface for match narratives

Provides commands for:
- Printing the derived report for one exported match
- Summarizing a list of matches
- Listing filtered kills with canvas coordinates
- Generating a default configuration file
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from roundscope import __version__
from roundscope.core.config import RoundScopeConfig, load_config, save_config, set_config
from roundscope.core.constants import InvalidMatchDataError, SortKey, TeamSlot
from roundscope.core.schemas import Match, MatchData
from roundscope.domains.economy import summarize_economy_wins
from roundscope.domains.scoreboard import (
    identify_standouts,
    player_name,
    rank_players,
    split_by_team,
    team_averages,
)
from roundscope.domains.sides import attribute_rounds, running_scores
from roundscope.domains.streaks import find_streaks
from roundscope.domains.summary import (
    format_duration,
    recent_matches,
    summarize_match,
    summarize_matches,
    win_method_label,
)
from roundscope.visualization.killmap import (
    KillFilter,
    compute_bounds,
    distinct_weapons,
    filter_kills,
    project_kills,
)

app = typer.Typer(
    name="roundscope",
    help="Derived match narratives for CS2 match statistics",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)

_config = RoundScopeConfig()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]RoundScope[/bold blue] v{__version__}")
        raise typer.Exit()


def _resolve_log_level(value: Any) -> int:
    """Map a configured level name or number to a logging level."""
    if isinstance(value, int) or str(value).strip().isdigit():
        return int(value)
    level = logging.getLevelNamesMapping().get(str(value).strip().upper())
    if level is None:
        console.print(f"[yellow]Unknown log level {value!r}, using INFO[/yellow]")
        return logging.INFO
    return level


@app.callback()
def main_callback(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose output"),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a config file (.yaml, .toml or .json)",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """RoundScope - CS2 match analytics"""
    global _config
    _config = load_config(config_file)
    set_config(_config)

    logging.basicConfig(level=_resolve_log_level(_config.logging.level), format=_config.logging.format)
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


def _read_json(path: Path) -> Any:
    try:
        with open(path) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON in {path}:[/red] {e}")
        raise typer.Exit(1)


def _load_match_data(path: Path) -> MatchData:
    try:
        return MatchData.from_dict(_read_json(path))
    except InvalidMatchDataError as e:
        console.print(f"[red]Invalid match data:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def report(
    match_path: Path = typer.Argument(
        ..., help="JSON export of one match", exists=True, dir_okay=False, resolve_path=True
    ),
    sort: Optional[SortKey] = typer.Option(
        None, "--sort", "-s", help="Scoreboard sort column (defaults to scoreboard.default_sort_key)"
    ),
    ascending: bool = typer.Option(False, "--asc", help="Sort ascending"),
) -> None:
    """Print the derived report for one match."""
    data = _load_match_data(match_path)
    rules = _config.rules
    labels = _config.scoreboard
    if sort is None:
        try:
            sort = SortKey(labels.default_sort_key)
        except ValueError:
            console.print(f"[red]Unknown sort key in config:[/red] {labels.default_sort_key}")
            raise typer.Exit(1)
    match = data.match

    try:
        narrative = summarize_match(
            match,
            data.rounds,
            rules.half_length,
            rules.overtime_round_threshold,
            rules.decisive_margin,
            rules.comfortable_margin,
        )
        scores = running_scores(data.rounds, match.team_a_started_as, rules.half_length)
        streaks = find_streaks(
            attribute_rounds(data.rounds, match.team_a_started_as, rules.half_length),
            rules.min_streak_length,
        )
        economy = summarize_economy_wins(data.economy, data.rounds, match.team_a_started_as, rules.half_length)
    except InvalidMatchDataError as e:
        console.print(f"[red]Invalid match data:[/red] {e}")
        raise typer.Exit(1)

    team_names = {TeamSlot.A: match.team_a_name, TeamSlot.B: match.team_b_name}

    header = (
        f"[bold]{match.team_a_name}[/bold] {match.team_a_score} : {match.team_b_score} "
        f"[bold]{match.team_b_name}[/bold]\n"
        f"{match.map_name} · {format_duration(match.duration_seconds)} · {match.date}\n"
        f"Half: {narrative.halftime.team_a_wins}-{narrative.halftime.team_b_wins} · "
        f"{narrative.result.label}"
    )
    if narrative.longest_streak:
        header += (
            f" · Longest streak: {team_names[narrative.longest_streak.team]} "
            f"({narrative.longest_streak.length})"
        )
    console.print(Panel(header, title="Match", expand=False))

    if data.rounds:
        rounds_table = Table(title="Rounds")
        rounds_table.add_column("Round", justify="right")
        rounds_table.add_column("Winner", style="cyan")
        rounds_table.add_column("Method")
        rounds_table.add_column("Score", justify="right")
        rounds_table.add_column("Clutch")
        for r, line in zip(data.rounds, scores):
            clutch = ""
            if r.clutch:
                outcome = "won" if r.clutch.won else "lost"
                clutch = f"{player_name(r.clutch.player_id, data.players)} {r.clutch.scenario} {outcome}"
            rounds_table.add_row(str(r.round_number), str(r.winner), win_method_label(r.win_method), str(line), clutch)
        console.print(rounds_table)

    for streak in streaks:
        console.print(
            f"[green]{team_names[streak.team]}[/green] won rounds "
            f"{streak.start_round}-{streak.end_round} ({streak.length} in a row)"
        )

    if economy.has_narrative:
        for team in (TeamSlot.A, TeamSlot.B):
            console.print(
                f"{team_names[team]}: {economy.eco_wins(team)} eco wins, {economy.force_wins(team)} force wins"
            )

    if data.player_stats:
        ranked = rank_players(data.player_stats, sort, ascending)
        split = split_by_team(ranked, labels.team_a_label, labels.team_b_label)
        standouts = identify_standouts(data.player_stats, labels.team_a_label, labels.team_b_label)
        for team, roster in ((TeamSlot.A, split.team_a), (TeamSlot.B, split.team_b)):
            _print_team_table(team_names[team], roster, standouts[team])


def _print_team_table(title: str, roster, standouts) -> None:
    badges = {s.player_id: s.label for s in standouts}
    table = Table(title=title)
    table.add_column("Player", style="cyan")
    for column in ("K", "D", "A", "ADR", "KAST%", "HS%", "Rating"):
        table.add_column(column, justify="right")
    table.add_column("")

    for p in roster:
        table.add_row(
            p.name,
            str(p.kills),
            str(p.deaths),
            str(p.assists),
            f"{p.adr:.1f}",
            f"{p.kast:.1f}",
            f"{p.hs_pct:.1f}",
            f"{p.rating:.2f}",
            badges.get(p.player_id, ""),
        )

    averages = team_averages(roster)
    if averages is not None:
        table.add_row(
            "[dim]Average[/dim]", "", "", "",
            f"{averages.adr:.1f}", f"{averages.kast:.1f}", f"{averages.hs_pct:.1f}", f"{averages.rating:.2f}", "",
        )
    console.print(table)


@app.command()
def dashboard(
    matches_path: Path = typer.Argument(
        ..., help="JSON list of matches", exists=True, dir_okay=False, resolve_path=True
    ),
) -> None:
    """Summarize a list of matches."""
    payload = _read_json(matches_path)
    if isinstance(payload, dict):
        payload = payload.get("matches", [])

    try:
        matches = [Match.from_dict(m) for m in payload]
    except InvalidMatchDataError as e:
        console.print(f"[red]Invalid match data:[/red] {e}")
        raise typer.Exit(1)

    summary = summarize_matches(matches)
    if summary.count == 0:
        console.print("No matches yet.")
        return

    table = Table(title="Dashboard", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Total Matches", str(summary.count))
    table.add_row("Most Played Map", f"{summary.most_played_map} ({summary.most_played_map_count} matches)")
    table.add_row("Avg Duration", format_duration(summary.avg_duration_seconds))
    table.add_row("Last Upload", summary.most_recent_timestamp)
    console.print(table)

    recent = Table(title="Recent Matches")
    recent.add_column("Map")
    recent.add_column("Score")
    recent.add_column("Date")
    for m in recent_matches(matches, _config.scoreboard.recent_matches_limit):
        recent.add_row(
            m.map_name.removeprefix("de_"),
            f"{m.team_a_name} {m.team_a_score}:{m.team_b_score} {m.team_b_name}",
            m.date,
        )
    console.print(recent)


@app.command()
def kills(
    match_path: Path = typer.Argument(
        ..., help="JSON export of one match", exists=True, dir_okay=False, resolve_path=True
    ),
    round_number: Optional[int] = typer.Option(None, "--round", "-r", help="Only this round"),
    player: Optional[str] = typer.Option(None, "--player", "-p", help="Attacker or victim Steam ID"),
    weapon: Optional[str] = typer.Option(None, "--weapon", "-w", help="Weapon name"),
) -> None:
    """List kills with their kill map canvas coordinates."""
    data = _load_match_data(match_path)
    spatial = _config.spatial

    try:
        bounds = compute_bounds(data.kills, spatial.padding_fraction, spatial.min_padding)
        selected = filter_kills(data.kills, KillFilter(round_number, player, weapon))
        projected = project_kills(selected, bounds, spatial.canvas_size, spatial.margin)
    except InvalidMatchDataError as e:
        console.print(f"[red]Invalid kill data:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title=f"Kills ({len(projected)} of {len(data.kills)})")
    table.add_column("Round", justify="right")
    table.add_column("Attacker", style="cyan")
    table.add_column("Victim")
    table.add_column("Weapon")
    table.add_column("Attacker XY", justify="right")
    table.add_column("Victim XY", justify="right")
    for pk in projected:
        k = pk.kill
        table.add_row(
            str(k.round_number),
            player_name(k.attacker_id, data.players),
            player_name(k.victim_id, data.players),
            k.weapon + (" (HS)" if k.is_headshot else ""),
            f"{pk.attacker_x:.0f},{pk.attacker_y:.0f}",
            f"{pk.victim_x:.0f},{pk.victim_y:.0f}",
        )
    console.print(table)
    console.print(f"Weapons: {', '.join(distinct_weapons(data.kills)) or '-'}")


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(Path("roundscope.yaml"), help="Where to write the config (.yaml or .json)"),
) -> None:
    """Write a default configuration file."""
    try:
        save_config(RoundScopeConfig(), path)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(f"Wrote default config to {path}")


if __name__ == "__main__":
    app()
